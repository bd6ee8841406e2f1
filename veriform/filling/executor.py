from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from veriform.browser.document import FormDocument
from veriform.utils.form_components import (
    CheckboxControl,
    ContentEditableControl,
    Control,
    FileControl,
    RadioControl,
    SelectControl,
    TextControl,
)
from veriform.utils.fuzzy_forms import FieldMatcher, MatchResult

from .actions import NO_MATCH_REASON, FillError, FillOutcome
from .formatters import format_value, stringify

logger = logging.getLogger(__name__)

CHANGE_EVENTS = ("change", "input")
"""Notifications dispatched on a control after every write, in this order."""


class FormFiller:
    """Writes a batch of field values into the controls of a document."""

    def __init__(self, matcher: FieldMatcher) -> None:
        self._matcher = matcher

    @property
    def matcher(self) -> FieldMatcher:
        return self._matcher

    async def fill_form(self, document: FormDocument, field_values: Mapping[str, Any]) -> FillOutcome:
        """Fill every field of ``field_values`` in order.

        Each field is its own failure domain: a field that cannot be matched or
        written is recorded in ``failed`` and the batch carries on.
        """

        results = FillOutcome()

        for field_name, value in field_values.items():
            try:
                match = await self.fill_field(document, field_name, value)
            except Exception as exc:
                reason = str(exc) or exc.__class__.__name__
                logger.error(f"Error filling field {field_name}: {reason}", exc_info=exc)
                results.add_failure(field_name, reason)
                continue

            if match is None:
                results.add_failure(field_name, NO_MATCH_REASON)
            else:
                results.add_success(field_name)

        return results

    async def fill_field(self, document: FormDocument, field_name: str, value: Any) -> Optional[MatchResult]:
        """Match, format and write one field; ``None`` when no control matched."""

        # Always re-read the document: earlier fields may have changed it.
        controls = await document.query_controls()

        match = self._matcher.find_match(field_name, controls)
        if match is None:
            return None

        formatted = format_value(field_name, value)
        if formatted.fell_back:
            logger.warning(f"Could not format value for field {field_name}; using it unchanged")

        await self._apply_value(document, match.control, formatted.value, controls)
        await self._trigger_change_events(document, match.control)

        logger.info(
            f"Filled field {field_name} ({match.match_type} match) with value: {stringify(formatted.value)}",
            extra={"field": field_name, "match_type": match.match_type, "score": match.score},
        )
        return match

    async def _apply_value(
        self,
        document: FormDocument,
        control: Control,
        value: Any,
        controls: Sequence[Control],
    ) -> None:
        if isinstance(control, RadioControl):
            await self._handle_radio_button(document, control, value, controls)
        elif isinstance(control, CheckboxControl):
            await document.set_checked(control, bool(value))
        elif isinstance(control, SelectControl):
            await self._handle_select(document, control, value)
        elif isinstance(control, FileControl):
            logger.warning("File inputs cannot be automatically filled")
        elif isinstance(control, ContentEditableControl):
            await document.set_text_content(control, stringify(value))
        elif isinstance(control, TextControl):
            await document.set_value(control, stringify(value))
        else:
            raise FillError(f"Unsupported control kind: {getattr(control, 'kind', type(control).__name__)}")

    async def _handle_radio_button(
        self,
        document: FormDocument,
        control: RadioControl,
        value: Any,
        controls: Sequence[Control],
    ) -> None:
        wanted = stringify(value).lower()
        for radio in self._radio_group(control, controls):
            if radio.value.lower() == wanted:
                await document.set_checked(radio, True)
                return
        logger.debug(f"No radio button in group {control.group!r} has value {wanted!r}")

    @staticmethod
    def _radio_group(control: RadioControl, controls: Sequence[Control]) -> List[RadioControl]:
        # A radio without a name forms a group of its own.
        if not control.group:
            return [control]
        return [
            candidate
            for candidate in controls
            if isinstance(candidate, RadioControl) and candidate.group == control.group
        ]

    async def _handle_select(self, document: FormDocument, control: SelectControl, value: Any) -> None:
        wanted = stringify(value).lower()
        for option in control.options:
            if option.value.lower() == wanted or option.text.lower() == wanted:
                await document.select_option(control, option.value)
                return
        logger.debug(f"No option matches {wanted!r}; selection left unchanged")

    async def _trigger_change_events(self, document: FormDocument, control: Control) -> None:
        for event_type in CHANGE_EVENTS:
            await document.dispatch_event(control, event_type)


__all__ = ["CHANGE_EVENTS", "FormFiller"]
