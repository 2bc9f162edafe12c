"""Pomodoro plan generation and rendering."""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Iterator, List

from loguru import logger

from .clock import EndCondition, EndKind, TimeOfDay, format_time


DEFAULTS = {
    "pomodoro_minutes": 25,
    "short_break_minutes": 5,
    "long_break_minutes": 15,
    "group_size": 4,
    "include_stats": True,
    "include_short_break_lines": False,
    "include_long_break_lines": True,
    "end": "",
}

POMODORO = "pomodoro"
SHORT_BREAK = "short_break"
LONG_BREAK = "long_break"


@dataclass(frozen=True)
class PlanSettings:
    """Interval lengths and output toggles for a plan."""

    pomodoro_minutes: int = DEFAULTS["pomodoro_minutes"]
    short_break_minutes: int = DEFAULTS["short_break_minutes"]
    long_break_minutes: int = DEFAULTS["long_break_minutes"]
    group_size: int = DEFAULTS["group_size"]
    include_stats: bool = DEFAULTS["include_stats"]
    include_short_break_lines: bool = DEFAULTS["include_short_break_lines"]
    include_long_break_lines: bool = DEFAULTS["include_long_break_lines"]
    end: str = DEFAULTS["end"]

    def __post_init__(self) -> None:
        if self.pomodoro_minutes < 1:
            raise ValueError("pomodoro_minutes must be at least 1")
        if self.group_size < 1:
            raise ValueError("group_size must be at least 1")
        if min(self.short_break_minutes, self.long_break_minutes) < 0:
            raise ValueError("break durations cannot be negative")

    def with_changes(self, **changes) -> "PlanSettings":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class PlanLine:
    """One scheduled block of work or rest."""

    start: TimeOfDay
    end: TimeOfDay
    label: str
    kind: str = POMODORO

    def render(self) -> str:
        return f"- [ ] {format_time(self.start)} - {format_time(self.end)} {self.label}"


@dataclass
class PlanResult:
    """The scheduled lines plus the totals reported under them."""

    lines: List[PlanLine] = field(default_factory=list)
    work_interval_count: int = 0
    total_work_minutes: int = 0
    total_rest_minutes: int = 0

    @property
    def is_empty(self) -> bool:
        return self.work_interval_count == 0

    def stats(self) -> List[str]:
        if self.is_empty:
            return []
        return [
            f"Total pomodoros: {self.work_interval_count}",
            f"Total work time: {format_duration(self.total_work_minutes)}",
            f"Total rest time: {format_duration(self.total_rest_minutes)}",
        ]

    def __iter__(self) -> Iterator[PlanLine]:
        return iter(self.lines)


def format_duration(minutes: int) -> str:
    hours, remainder = divmod(minutes, 60)
    if hours == 0:
        return f"{remainder} minutes"
    if remainder:
        return f"{hours} hours, {remainder} minutes"
    return f"{hours} hours"


def will_continue(candidate_minutes: int, candidate_work_count: int, end: EndCondition) -> bool:
    """Whether a plan that reaches ``candidate_minutes`` is still within ``end``.

    ``candidate_minutes`` counts from the start day's midnight and is never
    wrapped, so a time-kind end is not passed again after midnight.
    """
    if end.kind is EndKind.COUNT:
        return candidate_work_count <= end.value
    if end.kind is EndKind.TIME:
        return candidate_minutes <= end.value.total_minutes
    raise ValueError(f"unknown end condition: {end.kind!r}")


def generate(start: TimeOfDay, end: EndCondition, settings: PlanSettings) -> PlanResult:
    """Schedule pomodoros and breaks from ``start`` until ``end`` is reached.

    Args:
        start: Time the first pomodoro begins.
        end: Stop time (inclusive) or number of pomodoros to schedule.
        settings: Interval lengths, group size and which break lines to emit.

    A break is only scheduled when another pomodoro can follow it, so the
    plan never ends on a break. Breaks left out of the listing still take
    their time but are not counted as rest.
    """
    pomodoro = settings.pomodoro_minutes
    clock = start.total_minutes
    group_count = 0
    work_count = 1
    total_rest = 0
    lines: List[PlanLine] = []

    def block(minutes: int, label: str, kind: str) -> None:
        lines.append(
            PlanLine(
                start=TimeOfDay.from_minutes(clock),
                end=TimeOfDay.from_minutes(clock + minutes),
                label=label,
                kind=kind,
            )
        )

    while will_continue(clock + pomodoro, work_count, end):
        block(pomodoro, f"Pomodoro #{work_count}", POMODORO)
        clock += pomodoro
        work_count += 1
        group_count += 1

        if group_count == settings.group_size:
            rest = settings.long_break_minutes
            if not will_continue(clock + rest + pomodoro, work_count, end):
                break
            if settings.include_long_break_lines:
                block(rest, "Long Break", LONG_BREAK)
                total_rest += rest
            group_count = 0
        else:
            rest = settings.short_break_minutes
            if not will_continue(clock + rest + pomodoro, work_count, end):
                break
            if settings.include_short_break_lines:
                block(rest, "Short Break", SHORT_BREAK)
                total_rest += rest
        clock += rest

    work_intervals = work_count - 1
    if work_intervals == 0:
        logger.debug("No pomodoro fits between {} and {}", start, end.value)
        return PlanResult()

    result = PlanResult(
        lines=lines,
        work_interval_count=work_intervals,
        total_work_minutes=pomodoro * work_intervals,
        total_rest_minutes=total_rest,
    )
    logger.debug(
        "Planned {} pomodoro(s) from {}: {} min work, {} min rest",
        work_intervals,
        start,
        result.total_work_minutes,
        result.total_rest_minutes,
    )
    return result


def render_plan(result: PlanResult, *, include_stats: bool = DEFAULTS["include_stats"]) -> str:
    """Render a plan as a markdown checklist with an optional stats block."""
    if result.is_empty:
        return ""
    text = "\n".join(line.render() for line in result)
    if include_stats:
        text += "\n\n" + "\n".join(f"  {stat}" for stat in result.stats())
    return text
