"""Fill a page once from a JSON payload."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from veriform.browser import BrowserAutomation, BrowserConfig, PlaywrightDocument
from veriform.filling import FILL_ACTION, build_controller
from veriform.utils.field_mappings import FieldMapping
from veriform.workflow.config import get_settings

from ..options import mapping_option, read_payload, resolve_mapping

console = Console()


@click.command(name="fill")
@click.argument("url")
@click.option(
    "--data",
    "data_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON object of field name -> value",
)
@mapping_option
@click.option("--headless/--headed", default=None, help="Run browser in headless mode (defaults to VERIFORM_HEADLESS)")
@click.option("--keep-open", is_flag=True, help="Wait for Enter before closing the browser")
def fill_command(url: str, data_path: Path, mapping_path: Optional[Path], headless: Optional[bool], keep_open: bool):
    """
    Open URL and fill its form with the values in --data.

    Examples:

      veriform fill https://example.com/register --data scan.json

      veriform fill https://example.com/kyc --data scan.json --mapping fields.json --headed --keep-open
    """
    payload = read_payload(data_path)
    mapping = resolve_mapping(mapping_path)
    response = asyncio.run(_fill_page(url, payload, mapping, headless, keep_open))
    _display_response(response)
    if response.get("status") != "success":
        raise SystemExit(1)


async def _fill_page(
    url: str,
    payload: Dict[str, Any],
    mapping: FieldMapping,
    headless: Optional[bool],
    keep_open: bool,
) -> Dict[str, Any]:
    config = BrowserConfig.from_settings(get_settings(), headless=headless)
    controller = build_controller(mapping)

    async with BrowserAutomation(config) as automation:
        session = await automation.create_session()
        with console.status(f"[bold blue]Loading {url}..."):
            page = await session.open_page(url)
        console.print(f"[green]✓[/green] Navigated to {url}")

        document = PlaywrightDocument(page)
        response = await controller.handle_message({"action": FILL_ACTION, "data": payload}, document)

        if keep_open:
            await asyncio.to_thread(click.pause, "Press any key to close the browser...")

    return response or {"status": "error", "error": "No response from controller"}


def _display_response(response: Dict[str, Any]) -> None:
    if response.get("status") != "success":
        console.print(Panel(f"[red]{response.get('error', 'unknown error')}[/red]", title="Fill failed", border_style="red"))
        return

    results = response.get("results") or {}
    table = Table(title="Fill results", show_header=True, header_style="bold cyan", border_style="cyan")
    table.add_column("Field", style="yellow")
    table.add_column("Status")
    table.add_column("Reason", style="dim")

    for field_name in results.get("successful", []):
        table.add_row(field_name, "[green]filled[/green]", "")
    for failure in results.get("failed", []):
        table.add_row(failure["field"], "[red]failed[/red]", failure["reason"])

    console.print()
    console.print(table)
