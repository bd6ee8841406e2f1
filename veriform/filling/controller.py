"""Request/response boundary of the form filling engine.

Messages arrive as ``{"action": "updateDOM", "data": {<field>: <scalar>}}``
and are answered with ``{"status": "success", "results": {...}}`` or
``{"status": "error", "error": "<message>"}``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError

from veriform.browser.document import FormDocument
from veriform.utils.field_mappings import DEFAULT_FIELD_MAPPINGS, FieldMapping
from veriform.utils.fuzzy_forms import FieldMatcher

from .actions import FillOutcome
from .executor import FormFiller

logger = logging.getLogger(__name__)

FILL_ACTION = "updateDOM"

FieldValue = Union[str, bool, int, float, None]


class FillRequest(BaseModel):
    """Inbound fill message."""
    action: str
    data: Dict[str, FieldValue]


class FillResponse(BaseModel):
    """Outbound reply for one fill message."""
    status: Literal["success", "error"]
    results: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class FormFillingController:
    """Turns fill messages into :class:`FormFiller` batches."""

    def __init__(self, filler: FormFiller) -> None:
        self._filler = filler

    @property
    def filler(self) -> FormFiller:
        return self._filler

    async def handle_message(self, message: Mapping[str, Any], document: FormDocument) -> Optional[Dict[str, Any]]:
        """Answer a fill message; messages for other actions return ``None``."""

        logger.debug("Received message", extra={"action": message.get("action")})
        if message.get("action") != FILL_ACTION:
            return None

        try:
            request = FillRequest.model_validate(message)
            results = await self.handle_form_filling(request.data, document)
        except ValidationError as exc:
            logger.error(f"Rejected malformed fill request: {exc}")
            response = FillResponse(status="error", error=f"Invalid fill request: {exc.error_count()} validation error(s)")
        except Exception as exc:
            logger.exception("Form filling error")
            response = FillResponse(status="error", error=str(exc) or exc.__class__.__name__)
        else:
            response = FillResponse(status="success", results=results.to_dict())

        return response.model_dump(exclude_none=True)

    async def handle_form_filling(self, data: Mapping[str, Any], document: FormDocument) -> FillOutcome:
        results = await self._filler.fill_form(document, data)

        for field_name in results.successful:
            logger.info(f"Successfully filled field: {field_name}")
        for failure in results.failed:
            logger.warning(f"Failed to fill field: {failure.field}, Reason: {failure.reason}")

        return results


def build_controller(mapping: Optional[FieldMapping] = None) -> FormFillingController:
    """Wire matcher, filler and controller for ``mapping`` (default table when omitted)."""

    matcher = FieldMatcher(mapping if mapping is not None else DEFAULT_FIELD_MAPPINGS)
    return FormFillingController(FormFiller(matcher))


__all__ = [
    "FILL_ACTION",
    "FillRequest",
    "FillResponse",
    "FormFillingController",
    "build_controller",
]
