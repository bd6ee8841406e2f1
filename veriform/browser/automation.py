"""Playwright lifecycle for the pages Veriform fills."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

if TYPE_CHECKING:
    from veriform.workflow.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT: Dict[str, int] = {"width": 1366, "height": 900}
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


@dataclass
class BrowserConfig:
    """How to launch the browser that hosts the forms."""

    headless: bool = False
    browser_type: str = "chromium"
    viewport: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_VIEWPORT))
    user_agent: Optional[str] = None
    locale: Optional[str] = None
    slow_mo: int = 0  # ms between operations
    timeout: int = 30000  # ms
    ignore_https_errors: bool = True
    args: List[str] = field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: "Settings", *, headless: Optional[bool] = None) -> "BrowserConfig":
        return cls(
            headless=settings.headless if headless is None else headless,
            browser_type=settings.browser_type,
        )

    def launch_options(self) -> Dict[str, object]:
        options: Dict[str, object] = {"headless": self.headless, "slow_mo": self.slow_mo}
        if self.args:
            options["args"] = list(self.args)
        return options

    def context_options(self) -> Dict[str, object]:
        options: Dict[str, object] = {
            "viewport": dict(self.viewport),
            "ignore_https_errors": self.ignore_https_errors,
        }
        if self.user_agent:
            options["user_agent"] = self.user_agent
        if self.locale:
            options["locale"] = self.locale
        return options


@dataclass
class BrowserSession:
    """One browser, its context and the page it was opened with."""

    browser: Browser
    context: BrowserContext
    page: Page
    config: BrowserConfig

    def active_page(self) -> Page:
        """Return the most recently opened page that is still open.

        This is the page a user is looking at: forms opened in a new tab are
        filled there rather than on the start page.
        """

        for page in reversed(self.context.pages):
            if not page.is_closed():
                return page
        return self.page

    async def open_page(self, url: str) -> Page:
        """Navigate the active page to ``url`` and return it."""

        page = self.active_page()
        await page.goto(url, wait_until="domcontentloaded")
        logger.info(f"Opened {url}", extra={"browser": self.config.browser_type})
        return page

    async def close(self) -> None:
        try:
            await self.context.close()
            await self.browser.close()
        except Exception as exc:
            logger.error(f"Error closing browser session: {exc}")


class BrowserAutomation:
    """Async context manager owning Playwright and the sessions it launched."""

    def __init__(self, config: Optional[BrowserConfig] = None) -> None:
        self.config = config or BrowserConfig()
        self._playwright: Optional[Playwright] = None
        self._sessions: List[BrowserSession] = []

    @property
    def sessions(self) -> List[BrowserSession]:
        return list(self._sessions)

    async def __aenter__(self) -> "BrowserAutomation":
        self._playwright = await async_playwright().start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close_all_sessions()
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def create_session(self, config: Optional[BrowserConfig] = None) -> BrowserSession:
        """Launch a browser and open one page in a fresh context."""

        if self._playwright is None:
            raise RuntimeError("BrowserAutomation not started. Use async context manager.")

        session_config = config or self.config
        if session_config.browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(f"Unsupported browser type: {session_config.browser_type}")

        launcher = getattr(self._playwright, session_config.browser_type)
        browser = await launcher.launch(**session_config.launch_options())
        context = await browser.new_context(**session_config.context_options())
        context.set_default_timeout(session_config.timeout)
        page = await context.new_page()

        session = BrowserSession(browser=browser, context=context, page=page, config=session_config)
        self._sessions.append(session)
        logger.info(
            f"Launched {session_config.browser_type} (headless={session_config.headless})",
            extra={"sessions": len(self._sessions)},
        )
        return session

    async def close_session(self, session: BrowserSession) -> None:
        await session.close()
        if session in self._sessions:
            self._sessions.remove(session)

    async def close_all_sessions(self) -> None:
        for session in list(self._sessions):
            await self.close_session(session)


__all__ = [
    "BrowserAutomation",
    "BrowserConfig",
    "BrowserSession",
    "DEFAULT_VIEWPORT",
    "SUPPORTED_BROWSERS",
]
