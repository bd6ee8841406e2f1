"""Tests for the batch form filler."""
from __future__ import annotations

import logging

import pytest

from veriform.filling.actions import NO_MATCH_REASON
from veriform.filling.executor import FormFiller
from veriform.utils.field_mappings import DEFAULT_FIELD_MAPPINGS, build_field_mapping
from veriform.utils.fuzzy_forms import FieldMatcher
from veriform.tests.fakes import FakeDocument, make_control


def make_filler(mapping=None) -> FormFiller:
    return FormFiller(FieldMatcher(mapping if mapping is not None else DEFAULT_FIELD_MAPPINGS))


@pytest.mark.asyncio
async def test_exact_match_writes_value_and_dispatches_events_in_order():
    document = FakeDocument([make_control("first", name="first_name")])

    outcome = await make_filler().fill_form(document, {"firstName": "Anna"})

    assert outcome.to_dict() == {"successful": ["firstName"], "failed": []}
    assert document.calls == [
        ("set_value", "first", "Anna"),
        ("dispatch_event", "first", "change"),
        ("dispatch_event", "first", "input"),
    ]


@pytest.mark.asyncio
async def test_fuzzy_match_writes_to_similar_control():
    mapping = build_field_mapping({"firstName": ["first_name"]})
    document = FakeDocument([make_control("typo", name="firstnme")])

    outcome = await make_filler(mapping).fill_form(document, {"firstName": "Anna"})

    assert outcome.successful == ["firstName"]
    assert document.writes() == [("set_value", "typo", "Anna")]


@pytest.mark.asyncio
async def test_date_field_is_formatted_before_write():
    document = FakeDocument([make_control("dob", name="date_of_birth")])

    outcome = await make_filler().fill_form(document, {"birthDate": "2020-01-15T00:00:00Z"})

    assert outcome.succeeded
    assert document.writes() == [("set_value", "dob", "2020-01-15")]


@pytest.mark.asyncio
async def test_unparsable_date_is_written_verbatim(caplog):
    document = FakeDocument([make_control("dob", name="dob")])

    with caplog.at_level(logging.WARNING):
        outcome = await make_filler().fill_form(document, {"birthDate": "not-a-date"})

    assert outcome.successful == ["birthDate"]
    assert document.writes() == [("set_value", "dob", "not-a-date")]
    assert "Could not format value for field birthDate" in caplog.text


@pytest.mark.asyncio
async def test_unmapped_and_unmatched_fields_are_reported_and_batch_continues():
    document = FakeDocument([make_control("email", name="email")])

    outcome = await make_filler().fill_form(
        document,
        {"nickname": "Ann", "lastName": "Smith", "email": "ann@example.com"},
    )

    assert outcome.to_dict() == {
        "successful": ["email"],
        "failed": [
            {"field": "nickname", "reason": NO_MATCH_REASON},
            {"field": "lastName", "reason": NO_MATCH_REASON},
        ],
    }
    assert document.writes() == [("set_value", "email", "ann@example.com")]


@pytest.mark.asyncio
async def test_empty_batch_touches_nothing():
    document = FakeDocument([make_control("first", name="first_name")])

    outcome = await make_filler().fill_form(document, {})

    assert outcome.to_dict() == {"successful": [], "failed": []}
    assert document.calls == []
    assert document.scans == 0


@pytest.mark.asyncio
async def test_radio_selects_group_member_with_matching_value():
    document = FakeDocument(
        [
            make_control("male", kind="radio", name="gender", value="Male"),
            make_control("female", kind="radio", name="gender", value="Female"),
            make_control("other-group", kind="radio", name="title", value="female"),
        ]
    )

    outcome = await make_filler().fill_form(document, {"gender": "FEMALE"})

    assert outcome.successful == ["gender"]
    assert document.writes() == [("set_checked", "female", True)]
    assert document.events() == [("male", "change"), ("male", "input")]


@pytest.mark.asyncio
async def test_radio_without_matching_value_checks_nothing_but_succeeds():
    document = FakeDocument(
        [
            make_control("male", kind="radio", name="gender", value="M"),
            make_control("female", kind="radio", name="gender", value="F"),
        ]
    )

    outcome = await make_filler().fill_form(document, {"gender": "X"})

    assert outcome.successful == ["gender"]
    assert document.writes() == []
    assert document.events() == [("male", "change"), ("male", "input")]


@pytest.mark.asyncio
async def test_unnamed_radio_forms_its_own_group():
    mapping = build_field_mapping({"consent": ["consent"]})
    document = FakeDocument(
        [
            make_control("consent", kind="radio", id="consent", value="yes"),
            make_control("stray", kind="radio", id="other", value="yes"),
        ]
    )

    await make_filler(mapping).fill_form(document, {"consent": "yes"})

    assert document.writes() == [("set_checked", "consent", True)]


@pytest.mark.asyncio
@pytest.mark.parametrize(("raw", "expected"), [(True, True), ("true", True), ("false", False), ("no", False)])
async def test_checkbox_state_follows_boolean_formatting(raw, expected):
    document = FakeDocument([make_control("adult", kind="checkbox", name="age_over_18")])

    outcome = await make_filler().fill_form(document, {"isAgeOver18": raw})

    assert outcome.successful == ["isAgeOver18"]
    assert document.writes() == [("set_checked", "adult", expected)]


@pytest.mark.asyncio
async def test_select_matches_option_value_or_text_case_insensitively():
    options = [{"value": "DE", "text": "Germany"}, {"value": "FR", "text": "France"}]
    document = FakeDocument([make_control("country", kind="select", name="country_of_residence", options=options)])

    by_text = await make_filler().fill_form(document, {"country": "france"})
    by_value = await make_filler().fill_form(document, {"country": "de"})

    assert by_text.succeeded and by_value.succeeded
    assert document.writes() == [
        ("select_option", "country", "FR"),
        ("select_option", "country", "DE"),
    ]


@pytest.mark.asyncio
async def test_select_without_matching_option_is_left_unchanged():
    options = [{"value": "DE", "text": "Germany"}]
    document = FakeDocument([make_control("country", kind="select", name="country_of_residence", options=options)])

    outcome = await make_filler().fill_form(document, {"country": "Atlantis"})

    assert outcome.successful == ["country"]
    assert document.writes() == []
    assert document.events() == [("country", "change"), ("country", "input")]


@pytest.mark.asyncio
async def test_file_input_is_never_written(caplog):
    mapping = build_field_mapping({"portrait": ["portrait"]})
    document = FakeDocument([make_control("upload", kind="file", name="portrait")])

    with caplog.at_level(logging.WARNING):
        outcome = await make_filler(mapping).fill_form(document, {"portrait": "C:/photo.jpg"})

    assert outcome.successful == ["portrait"]
    assert document.writes() == []
    assert "File inputs cannot be automatically filled" in caplog.text


@pytest.mark.asyncio
async def test_content_editable_region_receives_text_content():
    document = FakeDocument([make_control("bio", kind="contenteditable", ariaLabel="Street Address")])

    await make_filler().fill_form(document, {"address": "1 Main St"})

    assert document.writes() == [("set_text_content", "bio", "1 Main St")]


@pytest.mark.asyncio
async def test_write_fault_is_recorded_and_later_fields_still_run():
    document = FakeDocument(
        [
            make_control("first", name="first_name"),
            make_control("adult", kind="checkbox", name="over18"),
        ],
        fail_on=("set_value",),
    )

    outcome = await make_filler().fill_form(document, {"firstName": "Anna", "isAgeOver18": True})

    assert outcome.to_dict() == {
        "successful": ["isAgeOver18"],
        "failed": [{"field": "firstName", "reason": "set_value failed"}],
    }
    assert document.writes() == [("set_checked", "adult", True)]


@pytest.mark.asyncio
async def test_controls_are_reread_for_every_field():
    revealed = make_control("last", name="last_name")

    def reveal_last_name(document, operation, control):
        if operation == "set_value" and control.handle == "first" and revealed not in document.controls:
            document.controls.append(revealed)

    document = FakeDocument([make_control("first", name="first_name")], on_write=reveal_last_name)

    outcome = await make_filler().fill_form(document, {"firstName": "Anna", "lastName": "Smith"})

    assert outcome.successful == ["firstName", "lastName"]
    assert document.scans == 2
    assert document.writes() == [("set_value", "first", "Anna"), ("set_value", "last", "Smith")]


@pytest.mark.asyncio
async def test_numbers_and_none_are_stringified_for_text_controls():
    document = FakeDocument([make_control("doc", name="document_number"), make_control("mail", name="email")])

    await make_filler().fill_form(document, {"documentNumber": 12345, "email": None})

    assert document.writes() == [("set_value", "doc", "12345"), ("set_value", "mail", "")]


@pytest.mark.asyncio
async def test_default_table_skips_controls_whose_names_merely_contain_a_short_synonym():
    document = FakeDocument(
        [
            make_control("full", name="fullname"),
            make_control("last", name="last_name"),
            make_control("issuing", name="issuing_country"),
            make_control("residence", name="country_of_residence"),
            make_control("national", name="national_id_number"),
            make_control("passport", name="passport_number"),
        ]
    )

    outcome = await make_filler().fill_form(
        document,
        {"lastName": "Smith", "country": "DE", "documentNumber": "X1234567"},
    )

    assert outcome.successful == ["lastName", "country", "documentNumber"]
    assert document.writes() == [
        ("set_value", "last", "Smith"),
        ("set_value", "residence", "DE"),
        ("set_value", "passport", "X1234567"),
    ]
