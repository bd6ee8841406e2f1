"""Show which control a field resolves to, without writing anything."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from veriform.browser import BrowserAutomation, BrowserConfig, PlaywrightDocument
from veriform.utils.form_components import describe_control
from veriform.utils.fuzzy_forms import FieldMatcher
from veriform.workflow.config import get_settings

from ..options import mapping_option, resolve_mapping

console = Console()


@click.command(name="match")
@click.argument("url")
@click.argument("fields", nargs=-1, required=True)
@mapping_option
def match_command(url: str, fields: tuple[str, ...], mapping_path: Optional[Path]):
    """
    Resolve FIELDS against the controls of URL and print the matches.

    Example:

      veriform match https://example.com/register firstName birthDate
    """
    matcher = FieldMatcher(resolve_mapping(mapping_path))
    asyncio.run(_show_matches(url, fields, matcher))


async def _show_matches(url: str, fields: tuple[str, ...], matcher: FieldMatcher) -> None:
    config = BrowserConfig.from_settings(get_settings(), headless=True)

    async with BrowserAutomation(config) as automation:
        session = await automation.create_session()
        page = await session.open_page(url)
        controls = await PlaywrightDocument(page).query_controls()

    table = Table(title=f"Matches on {url}", show_header=True, header_style="bold cyan", border_style="cyan")
    table.add_column("Field", style="yellow")
    table.add_column("Match")
    table.add_column("Score", justify="right")
    table.add_column("Control")

    for field_name in fields:
        match = matcher.find_match(field_name, controls)
        if match is None:
            table.add_row(field_name, "[red]none[/red]", "", "")
            continue
        summary = ", ".join(f"{key}={value}" for key, value in describe_control(match.control).items() if value)
        score = f"{match.score:.2f}" if match.score is not None else ""
        table.add_row(field_name, match.match_type, score, summary)

    console.print(f"[dim]{len(controls)} controls scanned[/dim]")
    console.print(table)
