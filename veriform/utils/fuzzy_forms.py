"""Resolve logical field names to concrete controls.

The matcher runs two passes over the controls of the current document:

1. Exact lookups: a configured candidate label that equals, or is contained
   in, any textual attribute of a control (id, name, class, placeholder,
   label, aria-label, test id).  The first control in scan order with an
   exact hit wins immediately.
2. Fuzzy lookups: only when no control produced an exact hit.  Each control is
   scored with the best normalized Levenshtein similarity over every
   (candidate, non-empty attribute) pair and the strictly highest score at or
   above :data:`FUZZY_MATCH_THRESHOLD` wins; ties keep the earliest control.

Nothing is cached between calls.  Callers pass the controls they just read
from the live document, so a later field sees any change made by an earlier
one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from .field_mappings import FieldMapping
from .form_components import Control, ControlView

logger = logging.getLogger(__name__)

FUZZY_MATCH_THRESHOLD = 0.8
"""Minimum similarity a control needs to be accepted as a fuzzy match."""

MatchType = Literal["exact", "fuzzy"]


def levenshtein(s1: str, s2: str) -> int:
    """Single-character insert/delete/substitute edit distance, cost 1 per edit."""

    return Levenshtein.distance(s1, s2)


def similarity(s1: str, s2: str) -> float:
    """Return ``1 - distance / max(len)`` for the case-folded strings.

    The result is always in ``[0, 1]`` and symmetric.  Two empty strings are
    identical by convention (``1.0``); the matcher itself never compares an
    empty attribute.
    """

    left = s1.lower()
    right = s2.lower()
    longest = max(len(left), len(right))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein(left, right) / longest


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Best control found for one field; ``score`` is only set for fuzzy matches."""

    control: Control
    match_type: MatchType
    score: Optional[float] = None


def find_exact_match(view: ControlView, candidates: Sequence[str]) -> bool:
    """Return ``True`` if any candidate equals or is contained in an attribute."""

    attributes = view.attributes()
    return any(
        attribute == candidate or candidate in attribute
        for candidate in candidates
        for attribute in attributes
    )


def best_fuzzy_score(view: ControlView, candidates: Sequence[str]) -> float:
    """Return the highest similarity between any candidate and any non-empty attribute."""

    best_score = 0.0
    for candidate in candidates:
        for attribute in view.matchable_attributes():
            score = similarity(candidate, attribute)
            if score > best_score:
                best_score = score
    return best_score


class FieldMatcher:
    """Find the control that best represents a logical field."""

    def __init__(self, mapping: FieldMapping, *, threshold: float = FUZZY_MATCH_THRESHOLD) -> None:
        self._mapping = mapping
        self._threshold = threshold

    @property
    def mapping(self) -> FieldMapping:
        return self._mapping

    @property
    def threshold(self) -> float:
        return self._threshold

    def candidates_for(self, field_name: str) -> Tuple[str, ...]:
        return tuple(self._mapping.get(field_name) or ())

    def find_match(self, field_name: str, controls: Sequence[Control]) -> Optional[MatchResult]:
        """Return the best control for ``field_name`` or ``None``.

        An unmapped field is not an error: it is logged and yields ``None``.
        """

        candidates = self.candidates_for(field_name)
        if not candidates:
            logger.warning(f"No mapping found for field: {field_name}")
            return None

        for control in controls:
            if find_exact_match(control.view, candidates):
                return MatchResult(control=control, match_type="exact")

        best: Optional[MatchResult] = None
        best_score = 0.0
        for control in controls:
            score = best_fuzzy_score(control.view, candidates)
            # Strictly greater keeps the first control on ties.
            if score >= self._threshold and score > best_score:
                best = MatchResult(control=control, match_type="fuzzy", score=score)
                best_score = score

        if best is None:
            logger.debug(
                f"No control cleared the fuzzy threshold for field: {field_name}",
                extra={"controls": len(controls), "threshold": self._threshold},
            )
        return best


__all__ = [
    "FUZZY_MATCH_THRESHOLD",
    "FieldMatcher",
    "MatchResult",
    "MatchType",
    "best_fuzzy_score",
    "find_exact_match",
    "levenshtein",
    "similarity",
]
