"""Options and helpers shared by the CLI commands."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import click

from veriform.utils.field_mappings import FieldMapping, load_field_mappings
from veriform.workflow.config import get_settings

mapping_option = click.option(
    "--mapping",
    "mapping_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file of field name -> candidate labels (defaults to VERIFORM_FIELD_MAPPINGS or the built-in table)",
)


def resolve_mapping(mapping_path: Optional[Path]) -> FieldMapping:
    if mapping_path is not None:
        return load_field_mappings(mapping_path)
    return get_settings().field_mapping()


def read_payload(path: Path) -> Dict[str, Any]:
    """Read a flat JSON object of field values."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{path} is not valid JSON: {exc}", param_hint="--data") from exc
    if not isinstance(payload, dict):
        raise click.BadParameter(f"{path} must contain a JSON object", param_hint="--data")
    return payload
