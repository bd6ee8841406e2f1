"""Document capability the filler reads controls from and writes values to."""
from __future__ import annotations

import logging
from typing import Any, List, Protocol, runtime_checkable

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from veriform.utils.form_components import (
    CONTROL_SELECTOR,
    DESCRIBE_CONTROL_SCRIPT,
    Control,
    control_from_descriptor,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class FormDocument(Protocol):
    """Queryable, mutable view of the interactive controls of one document.

    Implementations must read live state on every :meth:`query_controls` call.
    """

    async def query_controls(self) -> List[Control]:
        ...

    async def set_value(self, control: Control, value: str) -> None:
        ...

    async def set_checked(self, control: Control, checked: bool) -> None:
        ...

    async def select_option(self, control: Control, option_value: str) -> None:
        ...

    async def set_text_content(self, control: Control, text: str) -> None:
        ...

    async def dispatch_event(self, control: Control, event_type: str) -> None:
        ...


class PlaywrightDocument:
    """:class:`FormDocument` backed by a Playwright page."""

    def __init__(self, page: Page, *, selector: str = CONTROL_SELECTOR) -> None:
        self._page = page
        self._selector = selector

    @property
    def page(self) -> Page:
        return self._page

    async def query_controls(self) -> List[Control]:
        handles = await self._page.query_selector_all(self._selector)
        controls: List[Control] = []
        for handle in handles:
            try:
                descriptor = await handle.evaluate(DESCRIBE_CONTROL_SCRIPT)
            except PlaywrightError as exc:
                # Element detached between the query and the attribute read.
                logger.debug(f"Skipping control that disappeared during scan: {exc}")
                continue
            if not isinstance(descriptor, dict):
                continue
            controls.append(control_from_descriptor(handle, descriptor))
        return controls

    async def set_value(self, control: Control, value: str) -> None:
        await self._handle(control).evaluate("(el, value) => { el.value = value; }", value)

    async def set_checked(self, control: Control, checked: bool) -> None:
        await self._handle(control).evaluate("(el, checked) => { el.checked = checked; }", checked)

    async def select_option(self, control: Control, option_value: str) -> None:
        await self._handle(control).evaluate("(el, value) => { el.value = value; }", option_value)

    async def set_text_content(self, control: Control, text: str) -> None:
        await self._handle(control).evaluate("(el, text) => { el.textContent = text; }", text)

    async def dispatch_event(self, control: Control, event_type: str) -> None:
        # Playwright events bubble and are composed by default.
        await self._handle(control).dispatch_event(event_type)

    @staticmethod
    def _handle(control: Control) -> Any:
        if control.handle is None:
            raise ValueError(f"Control has no element handle: {control.view}")
        return control.handle


__all__ = ["FormDocument", "PlaywrightDocument"]
