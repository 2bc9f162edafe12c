"""Errors raised while parsing planner input or delivering a plan."""
from __future__ import annotations


class PlannerError(Exception):
    """Base class for planner errors."""


class InvalidEndSpecification(PlannerError, ValueError):
    """The end text is neither an ``HH:MM`` time nor a non-negative count."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid time or count format: {text!r}")
        self.text = text


class InvalidNumericField(PlannerError, ValueError):
    """A numeric settings field was edited to something that is not a valid value."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"Invalid value for {field}: {value!r}")
        self.field = field
        self.value = value


class EmptyPlanRequested(PlannerError):
    """A plan was requested for delivery before any pomodoro was scheduled."""

    def __init__(self) -> None:
        super().__init__("Please generate the plan first")
