"""Command line interface for the Pomodoro planner."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from . import scheduler
from .form import PlanForm
from .log import setup_logger
from .settings import SettingsStore


def non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a value of 0 or more, got {value}")
    return value


def positive_int(text: str) -> int:
    value = non_negative_int(text)
    if value == 0:
        raise argparse.ArgumentTypeError("expected a value of 1 or more")
    return value


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plan a day of pomodoros as a markdown checklist.")
    parser.add_argument("--start", help="start time as HH:MM (default: now)")
    parser.add_argument("--end", help="end time as HH:MM, or a number of pomodoros (default: the last one used)")
    parser.add_argument("--pomodoro-minutes", type=positive_int, help="minutes per pomodoro")
    parser.add_argument("--short-break-minutes", type=non_negative_int, help="minutes per short break")
    parser.add_argument("--long-break-minutes", type=non_negative_int, help="minutes per long break")
    parser.add_argument("--group-size", type=positive_int, help="pomodoros before each long break")
    parser.add_argument("--stats", action=argparse.BooleanOptionalAction, default=None, help="append totals under the plan")
    parser.add_argument("--short-break-lines", action=argparse.BooleanOptionalAction, default=None, help="list short breaks in the plan")
    parser.add_argument("--long-break-lines", action=argparse.BooleanOptionalAction, default=None, help="list long breaks in the plan")
    parser.add_argument("--output", type=Path, help="append the plan to this file instead of printing it")
    parser.add_argument("--settings", type=Path, help="settings file to load and save")
    parser.add_argument("--no-save", action="store_true", help="do not remember these settings")
    parser.add_argument("--plain", action="store_true", help="print only the plan")
    parser.add_argument("--verbose", "-v", action="store_true", help="show debug logging")
    return parser.parse_args(list(argv))


def notice(message: str) -> None:
    print(f"! {message}", file=sys.stderr)


def apply_overrides(settings: scheduler.PlanSettings, args: argparse.Namespace) -> scheduler.PlanSettings:
    changes = {
        "pomodoro_minutes": args.pomodoro_minutes,
        "short_break_minutes": args.short_break_minutes,
        "long_break_minutes": args.long_break_minutes,
        "group_size": args.group_size,
        "include_stats": args.stats,
        "include_short_break_lines": args.short_break_lines,
        "include_long_break_lines": args.long_break_lines,
        "end": args.end,
    }
    return settings.with_changes(**{name: value for name, value in changes.items() if value is not None})


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logger("DEBUG" if args.verbose else "WARNING")

    store = SettingsStore(args.settings)
    settings = apply_overrides(store.load(), args)
    form = PlanForm(settings, start=args.start, notify=notice)

    if not args.plain:
        print("Start     :", form.fields["start"])
        print("End       :", settings.end or "-")
        print("Pomodoro  :", settings.pomodoro_minutes, "minute(s)")
        print("Short br. :", settings.short_break_minutes, "minute(s)")
        print("Long br.  :", settings.long_break_minutes, "minute(s)")
        print("Group     :", settings.group_size, "pomodoro(s)")
        print()

    failures = []

    def deliver(text: str, final: scheduler.PlanSettings) -> None:
        if args.output is not None:
            try:
                with args.output.open("a", encoding="utf-8") as handle:
                    handle.write(text + "\n")
            except OSError as exc:
                notice(f"Could not write the plan to {args.output}: {exc}")
                failures.append(args.output)
                return
            logger.info(f"Appended plan to {args.output}")
            if not args.plain:
                print(f"Plan appended to {args.output}")
        else:
            print(text)
        if not args.no_save and not store.save(final):
            notice(f"Could not save settings to {store.path}")
            failures.append(store.path)

    if not form.submit(deliver):
        return 1
    return 1 if failures else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
