"""Editable plan form that regenerates the plan on every accepted edit.

The form keeps the text the user typed apart from the validated
``PlanSettings``. Text is only promoted into the settings once it parses,
so a half-typed number never leaves the settings in an invalid state.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Optional

from loguru import logger

from . import clock, scheduler
from .errors import EmptyPlanRequested, InvalidEndSpecification, InvalidNumericField

NUMERIC_FIELDS = {
    "pomodoro": "pomodoro_minutes",
    "short_break": "short_break_minutes",
    "long_break": "long_break_minutes",
    "group": "group_size",
}

TOGGLES = {
    "stats": "include_stats",
    "short_break_lines": "include_short_break_lines",
    "long_break_lines": "include_long_break_lines",
}

Notify = Callable[[str], None]
Deliver = Callable[[str, scheduler.PlanSettings], None]


def _log_notice(message: str) -> None:
    logger.warning(message)


class PlanForm:
    """Text fields for one plan plus the settings they have been validated into."""

    def __init__(
        self,
        settings: Optional[scheduler.PlanSettings] = None,
        *,
        start: Optional[str] = None,
        now: Optional[datetime] = None,
        notify: Optional[Notify] = None,
    ) -> None:
        self.settings = settings or scheduler.PlanSettings()
        self.notify = notify or _log_notice
        if start is None:
            start = f"{now or datetime.now():%H:%M}"
        self.fields: Dict[str, str] = {
            "start": start,
            "end": self.settings.end,
        }
        for name, attr in NUMERIC_FIELDS.items():
            self.fields[name] = str(getattr(self.settings, attr))
        self.result = scheduler.PlanResult()
        self.text = ""
        self.regenerate()

    def edit(self, name: str, value: str) -> bool:
        """Apply a text edit and return whether the plan was regenerated."""
        if name not in self.fields:
            raise KeyError(name)
        self.fields[name] = value
        if name in NUMERIC_FIELDS:
            try:
                self.settings = self._validated(name, value)
            except InvalidNumericField as exc:
                logger.debug(f"Ignoring edit: {exc}")
                self.notify(str(exc))
                return False
        elif name == "end":
            self.settings = self.settings.with_changes(end=value)
        self.regenerate()
        return True

    def toggle(self, name: str, enabled: bool) -> None:
        self.settings = self.settings.with_changes(**{TOGGLES[name]: bool(enabled)})
        self.regenerate()

    def _validated(self, name: str, value: str) -> scheduler.PlanSettings:
        try:
            return self.settings.with_changes(**{NUMERIC_FIELDS[name]: int(value.strip())})
        except ValueError:
            raise InvalidNumericField(name, value) from None

    def regenerate(self) -> scheduler.PlanResult:
        """Rebuild the plan from the current start, end and settings."""
        self.result = scheduler.PlanResult()
        self.text = ""
        try:
            start = clock.parse_time(self.fields["start"])
        except ValueError as exc:
            self.notify(str(exc))
            return self.result

        end_text = self.fields["end"]
        if not end_text.strip():
            return self.result
        try:
            end = clock.parse_end_spec(end_text)
        except InvalidEndSpecification as exc:
            self.notify(str(exc))
            end = clock.EndCondition.count(0)

        self.result = scheduler.generate(start, end, self.settings)
        self.text = scheduler.render_plan(self.result, include_stats=self.settings.include_stats)
        return self.result

    def submit(self, deliver: Deliver) -> bool:
        """Hand the rendered plan and the settings behind it to ``deliver``.

        Nothing is delivered while the plan is empty; the user gets a notice
        instead.
        """
        if self.result.is_empty:
            self.notify(str(EmptyPlanRequested()))
            return False
        deliver(self.text, self.settings)
        return True
