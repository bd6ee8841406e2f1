"""Listen for scanned identity data and fill the active page."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.panel import Panel

from veriform.browser import BrowserAutomation, BrowserConfig, PlaywrightDocument
from veriform.filling import FILL_ACTION, build_controller
from veriform.utils.field_mappings import FieldMapping
from veriform.workflow.config import get_settings
from veriform.workflow.listener import ScannedDataListener

from ..options import mapping_option, resolve_mapping

console = Console()
logger = logging.getLogger(__name__)


@click.command(name="listen")
@click.option("--start-url", help="Page to open before listening")
@click.option("--sse-url", help="Verifier event stream (defaults to VERIFORM_SSE_URL)")
@mapping_option
def listen_command(start_url: Optional[str], sse_url: Optional[str], mapping_path: Optional[Path]):
    """
    Open a browser and fill the active page on every SCANNED_DATA event.

    Navigate to the form in the opened browser, then scan a document; the
    verified fields are written into the page as they arrive. Ctrl+C stops.
    """
    mapping = resolve_mapping(mapping_path)
    asyncio.run(_listen(start_url, sse_url or get_settings().sse_url, mapping))


async def _listen(start_url: Optional[str], sse_url: str, mapping: FieldMapping) -> None:
    settings = get_settings()
    config = BrowserConfig.from_settings(settings)
    controller = build_controller(mapping)

    async with BrowserAutomation(config) as automation:
        session = await automation.create_session()
        if start_url:
            await session.open_page(start_url)

        async def on_scanned_data(payload: Dict[str, Any]) -> None:
            page = session.active_page()
            logger.info(f"Filling {page.url} with {len(payload)} scanned fields")
            response = await controller.handle_message({"action": FILL_ACTION, "data": payload}, PlaywrightDocument(page))
            logger.info(f"Fill response: {response}")

        listener = ScannedDataListener(
            sse_url,
            on_scanned_data,
            max_reconnect_attempts=settings.reconnect_attempts,
            reconnect_delay=settings.reconnect_delay_seconds,
            keepalive_interval=settings.keepalive_interval_seconds,
            verify_ssl=settings.verify_ssl,
        )

        console.print(Panel(
            f"[bold cyan]Listening for scanned data[/bold cyan]\n\n"
            f"Stream: [yellow]{sse_url}[/yellow]\n"
            f"Fields mapped: [yellow]{len(mapping)}[/yellow]",
            border_style="cyan"
        ))
        try:
            await listener.run()
        finally:
            listener.stop()
