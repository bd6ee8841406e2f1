"""Per-field value formatting applied before a value is written to a control."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict

from dateutil import parser as date_parser

from .actions import Formatted, FormattedWithFallback, FormatResult

logger = logging.getLogger(__name__)

DATE_FIELDS = frozenset({"birthDate", "expiryDate", "issueDate"})
BOOLEAN_FIELDS = frozenset({"isAgeOver18", "isAgeOver21"})

# Fills the parts a free-form date leaves out, so "March 2020" is the 1st.
_MISSING_DATE_PARTS = datetime(2000, 1, 1)


def stringify(value: Any) -> str:
    """Render a payload scalar the way it appears in JSON text."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def _parse_date(raw: Any) -> date:
    if isinstance(raw, bool):
        raise TypeError("boolean is not a date")
    if isinstance(raw, (int, float)):
        # Numeric payload values are epoch milliseconds.
        return datetime.fromtimestamp(raw / 1000, tz=timezone.utc).date()
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, date):
        return raw
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise ValueError("empty date string")
        try:
            parsed = date_parser.isoparse(text)
        except ValueError:
            parsed = date_parser.parse(text, default=_MISSING_DATE_PARTS)
    else:
        raise TypeError(f"unsupported date value type: {type(raw).__name__}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def format_date(raw: Any) -> FormatResult:
    """Render ``raw`` as ``YYYY-MM-DD``.

    Unparsable input is returned unchanged; the caller still writes it.
    """

    try:
        parsed = _parse_date(raw)
    except (ValueError, TypeError, OverflowError) as exc:
        logger.debug(f"Keeping unparsable date value {raw!r}: {exc}")
        return FormattedWithFallback(value=raw, error=str(exc))
    return Formatted(value=parsed.isoformat())


def format_boolean(raw: Any) -> FormatResult:
    """Only a value whose text is ``"true"`` (any case) is true; everything else is false."""

    return Formatted(value=stringify(raw).lower() == "true")


_FORMATTERS: Dict[str, Callable[[Any], FormatResult]] = {
    **{field_name: format_date for field_name in DATE_FIELDS},
    **{field_name: format_boolean for field_name in BOOLEAN_FIELDS},
}


def format_value(field_name: str, raw: Any) -> FormatResult:
    formatter = _FORMATTERS.get(field_name)
    if formatter is None:
        return Formatted(value=stringify(raw))
    return formatter(raw)


__all__ = [
    "BOOLEAN_FIELDS",
    "DATE_FIELDS",
    "format_boolean",
    "format_date",
    "format_value",
    "stringify",
]
