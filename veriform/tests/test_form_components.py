"""Tests for typed control snapshots."""
from __future__ import annotations

import pytest

from veriform.utils.form_components import (
    CheckboxControl,
    ContentEditableControl,
    ControlView,
    FileControl,
    RadioControl,
    SelectControl,
    SelectOption,
    TextControl,
    control_from_descriptor,
    control_kind,
    describe_control,
)


def test_view_attributes_are_case_folded_and_only_label_is_trimmed():
    view = ControlView.from_descriptor(
        {
            "id": "  Given-Name ",
            "name": "FIRST_NAME",
            "className": "Form-Control",
            "placeholder": "First Name",
            "label": "  Given name\n",
            "ariaLabel": "GIVEN",
            "testId": "KYC-First",
        }
    )

    assert view.attributes() == (
        "  given-name ",
        "first_name",
        "form-control",
        "first name",
        "given name",
        "given",
        "kyc-first",
    )


def test_missing_attributes_become_empty_and_are_not_matchable():
    view = ControlView.from_descriptor({"name": "email", "placeholder": None})

    assert view.placeholder == ""
    assert view.matchable_attributes() == ("email",)


def test_radio_keeps_raw_group_and_value():
    control = control_from_descriptor("h1", {"kind": "radio", "name": "Gender", "value": "Male"})

    assert isinstance(control, RadioControl)
    assert control.group == "Gender"
    assert control.value == "Male"
    assert control.view.name == "gender"


def test_select_options_are_parsed_and_malformed_entries_skipped():
    control = control_from_descriptor(
        "h2",
        {
            "kind": "select",
            "name": "country",
            "options": [{"value": "DE", "text": "Germany"}, "junk", {"value": "FR"}],
        },
    )

    assert isinstance(control, SelectControl)
    assert control.options == (SelectOption("DE", "Germany"), SelectOption("FR", ""))


def test_kinds_map_to_their_control_types():
    assert isinstance(control_from_descriptor(1, {"kind": "checkbox"}), CheckboxControl)
    assert isinstance(control_from_descriptor(2, {"kind": "file"}), FileControl)
    assert isinstance(control_from_descriptor(3, {"kind": "contenteditable"}), ContentEditableControl)
    assert isinstance(control_from_descriptor(4, {"kind": "text"}), TextControl)


def test_unknown_kind_is_treated_as_text():
    control = control_from_descriptor("h", {"kind": "color", "name": "favourite"})

    assert isinstance(control, TextControl)
    assert control.kind == "text"
    assert control.handle == "h"


def test_describe_control_omits_empty_attributes():
    control = control_from_descriptor("h", {"kind": "checkbox", "id": "Terms"})

    assert describe_control(control) == {
        "kind": "checkbox",
        "id": "terms",
        "name": None,
        "label": None,
        "placeholder": None,
    }


@pytest.mark.parametrize(
    ("input_type", "editable", "expected"),
    [
        ("radio", False, "radio"),
        ("checkbox", True, "checkbox"),
        ("select-one", False, "select"),
        ("select-multiple", False, "text"),
        ("file", False, "file"),
        ("text", False, "text"),
        ("textarea", False, "text"),
        ("", True, "contenteditable"),
        ("text", True, "contenteditable"),
        ("textarea", True, "contenteditable"),
    ],
)
def test_control_kind_follows_type_then_contenteditable(input_type, editable, expected):
    assert control_kind(input_type, editable) == expected


def test_editable_textarea_descriptor_is_written_through_text_content():
    control = control_from_descriptor("h", {"tag": "textarea", "type": "textarea", "editable": True, "name": "notes"})

    assert isinstance(control, ContentEditableControl)
