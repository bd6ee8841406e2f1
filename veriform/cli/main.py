#!/usr/bin/env python3
"""Main CLI entry point for Veriform."""
from __future__ import annotations

import sys
from typing import Optional

import click
from rich.console import Console

from veriform.utils.log_setup import configure_logging
from veriform.workflow.config import get_settings

from .commands import fill, listen, mappings, match

console = Console()


@click.group()
@click.version_option(version="0.1.0", prog_name="veriform")
@click.option("--log-level", help="Logging level (defaults to VERIFORM_LOG_LEVEL or INFO)")
def cli(log_level: Optional[str]):
    """
    Veriform - fill web forms from verified identity data.

    Match payload fields to the controls of a page and write the values
    the way a user edit would.
    """
    configure_logging(log_level or get_settings().log_level)


# Register all commands
cli.add_command(fill.fill_command)
cli.add_command(match.match_command)
cli.add_command(listen.listen_command)
cli.add_command(mappings.mappings_command)


def main():
    """Entry point for the CLI."""
    try:
        cli(standalone_mode=False)
    except click.exceptions.Abort:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
