"""Playwright-backed documents and browser sessions."""

from .automation import BrowserAutomation, BrowserConfig, BrowserSession, DEFAULT_VIEWPORT
from .document import FormDocument, PlaywrightDocument

__all__ = [
    "BrowserAutomation",
    "BrowserConfig",
    "BrowserSession",
    "DEFAULT_VIEWPORT",
    "FormDocument",
    "PlaywrightDocument",
]
