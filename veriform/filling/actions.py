from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

NO_MATCH_REASON = "No matching field found"


@dataclass(slots=True)
class FillFailure:
    """A field that could not be filled and why."""

    field: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "reason": self.reason}


@dataclass(slots=True)
class FillOutcome:
    """Per-batch result emitted by :class:`FormFiller`.

    Both lists keep the order in which fields were processed.
    """

    successful: List[str] = field(default_factory=list)
    failed: List[FillFailure] = field(default_factory=list)

    def add_success(self, field_name: str) -> None:
        self.successful.append(field_name)

    def add_failure(self, field_name: str, reason: str) -> None:
        self.failed.append(FillFailure(field=field_name, reason=reason))

    @property
    def succeeded(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "successful": list(self.successful),
            "failed": [failure.to_dict() for failure in self.failed],
        }


@dataclass(frozen=True, slots=True)
class Formatted:
    """Value produced by a formatter."""

    value: Any

    @property
    def fell_back(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class FormattedWithFallback:
    """Formatter could not interpret the input; ``value`` is the raw input unchanged."""

    value: Any
    error: Optional[str] = None

    @property
    def fell_back(self) -> bool:
        return True


FormatResult = Union[Formatted, FormattedWithFallback]


class FillError(RuntimeError):
    """Raised when a value cannot be applied to a matched control."""

    def __init__(self, message: str, *, field: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.field = field
        self.data = data or {}
