"""Print the effective field mapping table."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ..options import mapping_option, resolve_mapping

console = Console()


@click.command(name="mappings")
@mapping_option
def mappings_command(mapping_path: Optional[Path]):
    """List every field and the labels it is matched against."""
    mapping = resolve_mapping(mapping_path)

    table = Table(title="Field mappings", show_header=True, header_style="bold cyan", border_style="cyan")
    table.add_column("Field", style="yellow", no_wrap=True)
    table.add_column("Candidate labels")
    for field_name, candidates in mapping.items():
        table.add_row(field_name, ", ".join(candidates))

    console.print(table)
