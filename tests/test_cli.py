import json

import pytest

from pomodoroplanner import cli

FIVE_POMODOROS = """\
- [ ] 09:00 - 09:25 Pomodoro #1
- [ ] 09:30 - 09:55 Pomodoro #2
- [ ] 10:00 - 10:25 Pomodoro #3
- [ ] 10:30 - 10:55 Pomodoro #4
- [ ] 10:55 - 11:10 Long Break
- [ ] 11:10 - 11:35 Pomodoro #5

  Total pomodoros: 5
  Total work time: 2 hours, 5 minutes
  Total rest time: 15 minutes
"""


def run(tmp_path, *args):
    return cli.main(["--settings", str(tmp_path / "settings.json"), *args])


def test_prints_plan_and_remembers_settings(tmp_path, capsys):
    assert run(tmp_path, "--start", "09:00", "--end", "5", "--plain") == 0
    assert capsys.readouterr().out == FIVE_POMODOROS
    saved = json.loads((tmp_path / "settings.json").read_text())
    assert saved["end"] == "5"
    assert saved["pomodoro_minutes"] == 25


def test_remembered_end_is_reused(tmp_path, capsys):
    run(tmp_path, "--start", "09:00", "--end", "5", "--plain")
    capsys.readouterr()
    assert run(tmp_path, "--start", "09:00", "--plain") == 0
    assert capsys.readouterr().out == FIVE_POMODOROS


def test_header_lists_the_settings(tmp_path, capsys):
    run(tmp_path, "--start", "09:00", "--end", "1", "--pomodoro-minutes", "50", "--no-save")
    out = capsys.readouterr().out
    assert "Pomodoro  : 50 minute(s)" in out
    assert "- [ ] 09:00 - 09:50 Pomodoro #1" in out
    assert not (tmp_path / "settings.json").exists()


def test_flags_override_toggles(tmp_path, capsys):
    run(tmp_path, "--start", "09:00", "--end", "2", "--no-stats", "--short-break-lines", "--plain")
    assert capsys.readouterr().out == (
        "- [ ] 09:00 - 09:25 Pomodoro #1\n"
        "- [ ] 09:25 - 09:30 Short Break\n"
        "- [ ] 09:30 - 09:55 Pomodoro #2\n"
    )


def test_output_file_is_appended(tmp_path, capsys):
    target = tmp_path / "today.md"
    target.write_text("# Today\n")
    run(tmp_path, "--start", "09:00", "--end", "09:30", "--no-stats", "--output", str(target), "--plain")
    run(tmp_path, "--start", "14:00", "--end", "14:25", "--no-stats", "--output", str(target), "--plain")
    assert target.read_text() == (
        "# Today\n"
        "- [ ] 09:00 - 09:25 Pomodoro #1\n"
        "- [ ] 14:00 - 14:25 Pomodoro #1\n"
    )
    assert capsys.readouterr().out == ""


def test_invalid_end_reports_and_writes_nothing(tmp_path, capsys):
    assert run(tmp_path, "--start", "09:00", "--end", "abc", "--plain") == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid time or count format" in captured.err
    assert "Please generate the plan first" in captured.err
    assert not (tmp_path / "settings.json").exists()


@pytest.mark.parametrize("flag, value", [("--pomodoro-minutes", "0"), ("--group-size", "x"), ("--short-break-minutes", "-1")])
def test_bad_numbers_are_rejected_by_the_parser(tmp_path, flag, value):
    with pytest.raises(SystemExit):
        run(tmp_path, "--end", "3", flag, value)


def test_unwritable_output_reports_and_skips_saving(tmp_path, capsys):
    target = tmp_path / "missing" / "today.md"
    assert run(tmp_path, "--start", "09:00", "--end", "2", "--output", str(target), "--plain") == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"Could not write the plan to {target}" in captured.err
    assert not target.exists()
    assert not (tmp_path / "settings.json").exists()


def test_unwritable_settings_still_prints_the_plan(tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    settings_path = blocker / "settings.json"
    assert cli.main(["--settings", str(settings_path), "--start", "09:00", "--end", "5", "--plain"]) == 1
    captured = capsys.readouterr()
    assert captured.out == FIVE_POMODOROS
    assert f"Could not save settings to {settings_path}" in captured.err
