"""Veriform: fill web forms from verified identity data."""

from .browser import BrowserAutomation, BrowserConfig, BrowserSession, FormDocument, PlaywrightDocument
from .filling import (
    FillOutcome,
    FormFiller,
    FormFillingController,
    build_controller,
)
from .utils import (
    DEFAULT_FIELD_MAPPINGS,
    FieldMatcher,
    MatchResult,
    build_field_mapping,
    load_field_mappings,
)

__all__ = [
    # Matching
    "DEFAULT_FIELD_MAPPINGS",
    "FieldMatcher",
    "MatchResult",
    "build_field_mapping",
    "load_field_mappings",
    # Filling
    "FillOutcome",
    "FormFiller",
    "FormFillingController",
    "build_controller",
    # Browser
    "BrowserAutomation",
    "BrowserConfig",
    "BrowserSession",
    "FormDocument",
    "PlaywrightDocument",
]
