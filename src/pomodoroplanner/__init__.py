"""Pomodoro plan generator."""
from .clock import EndCondition, EndKind, TimeOfDay, add_minutes, format_time, parse_end_spec, parse_time
from .errors import EmptyPlanRequested, InvalidEndSpecification, InvalidNumericField, PlannerError
from .scheduler import DEFAULTS, PlanLine, PlanResult, PlanSettings, generate, render_plan

__all__ = [
    "DEFAULTS",
    "EmptyPlanRequested",
    "EndCondition",
    "EndKind",
    "InvalidEndSpecification",
    "InvalidNumericField",
    "PlanLine",
    "PlanResult",
    "PlanSettings",
    "PlannerError",
    "TimeOfDay",
    "add_minutes",
    "format_time",
    "generate",
    "parse_end_spec",
    "parse_time",
    "render_plan",
]
