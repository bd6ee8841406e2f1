"""Control model, field mapping tables and the field matcher."""

from .field_mappings import (
    DEFAULT_FIELD_MAPPINGS,
    FieldMapping,
    FieldMappingError,
    build_field_mapping,
    load_field_mappings,
)
from .form_components import (
    CONTROL_SELECTOR,
    CheckboxControl,
    ContentEditableControl,
    Control,
    ControlView,
    FileControl,
    RadioControl,
    SelectControl,
    SelectOption,
    TextControl,
    control_from_descriptor,
)
from .fuzzy_forms import FUZZY_MATCH_THRESHOLD, FieldMatcher, MatchResult, levenshtein, similarity

__all__ = [
    "DEFAULT_FIELD_MAPPINGS",
    "FieldMapping",
    "FieldMappingError",
    "build_field_mapping",
    "load_field_mappings",
    "CONTROL_SELECTOR",
    "CheckboxControl",
    "ContentEditableControl",
    "Control",
    "ControlView",
    "FileControl",
    "RadioControl",
    "SelectControl",
    "SelectOption",
    "TextControl",
    "control_from_descriptor",
    "FUZZY_MATCH_THRESHOLD",
    "FieldMatcher",
    "MatchResult",
    "levenshtein",
    "similarity",
]
