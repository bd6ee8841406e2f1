"""Value formatting, write strategies and the fill request boundary."""

from .actions import (
    NO_MATCH_REASON,
    FillError,
    FillFailure,
    FillOutcome,
    Formatted,
    FormattedWithFallback,
    FormatResult,
)
from .controller import FILL_ACTION, FillRequest, FillResponse, FormFillingController, build_controller
from .executor import CHANGE_EVENTS, FormFiller
from .formatters import format_boolean, format_date, format_value, stringify

__all__ = [
    "NO_MATCH_REASON",
    "FillError",
    "FillFailure",
    "FillOutcome",
    "Formatted",
    "FormattedWithFallback",
    "FormatResult",
    "FILL_ACTION",
    "FillRequest",
    "FillResponse",
    "FormFillingController",
    "build_controller",
    "CHANGE_EVENTS",
    "FormFiller",
    "format_boolean",
    "format_date",
    "format_value",
    "stringify",
]
