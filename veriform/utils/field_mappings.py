"""Field name to candidate label tables.

A :data:`FieldMapping` maps a logical field name from the verified-data payload
(``firstName``, ``birthDate``...) to the ordered synonyms the matcher looks for
in control attributes.  Tables are case-folded and frozen when built so the
engine can treat them as immutable for its whole lifetime.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

FieldMapping = Mapping[str, Tuple[str, ...]]


class FieldMappingError(ValueError):
    """Raised when a field mapping file cannot be used."""


_DEFAULT_TABLE: Dict[str, Sequence[str]] = {
    # ----------------------------
    # Personal Info
    # ----------------------------
    "firstName": ["first_name", "firstname", "first name", "given_name", "givenname", "given name", "fname", "forename"],
    "lastName": ["last_name", "lastname", "last name", "surname", "family_name", "familyname", "family name"],
    "middleName": ["middle_name", "middlename", "middle name"],
    "fullName": ["full_name", "fullname", "full name", "applicant_name"],
    "birthDate": ["birth_date", "birthdate", "date of birth", "date_of_birth", "dateofbirth", "dob", "birthday"],
    "placeOfBirth": ["place_of_birth", "placeofbirth", "place of birth", "birth_place", "birthplace"],
    "gender": ["gender", "sex"],
    "nationality": ["nationality", "citizenship"],
    # ----------------------------
    # Identity Document
    # ----------------------------
    "documentNumber": [
        "document_number",
        "documentnumber",
        "document number",
        "passport_number",
        "passportnumber",
        "passport number",
    ],
    "documentType": ["document_type", "documenttype", "document type", "id_type"],
    "issuingCountry": ["issuing_country", "issuingcountry", "issuing country", "country_of_issue", "issuing_state"],
    "issueDate": ["issue_date", "issuedate", "date of issue", "date_of_issue", "issued_on"],
    "expiryDate": [
        "expiry_date",
        "expirydate",
        "expiry date",
        "expiration_date",
        "expirationdate",
        "expiration date",
        "date of expiry",
        "valid_until",
    ],
    "personalNumber": ["personal_number", "personalnumber", "personal number", "national_id", "nationalid"],
    # ----------------------------
    # Address Fields
    # ----------------------------
    "address": ["street_address", "streetaddress", "street address", "address_line1", "address1", "home_address"],
    "city": ["city", "town", "municipality"],
    "postalCode": ["postal_code", "postalcode", "postal code", "zip_code", "zipcode", "postcode", "zip"],
    "country": [
        "country_of_residence",
        "countryofresidence",
        "country of residence",
        "residence_country",
        "residencecountry",
    ],
    # ----------------------------
    # Contact
    # ----------------------------
    "email": ["email", "e-mail", "email_address", "emailaddress"],
    "phone": ["phone", "phone_number", "telephone", "mobile"],
    # ----------------------------
    # Age Attestations
    # ----------------------------
    "isAgeOver18": ["age_over_18", "ageover18", "over18", "over_18", "is_adult", "adult"],
    "isAgeOver21": ["age_over_21", "ageover21", "over21", "over_21"],
}


def _normalize_candidates(field: str, candidates: Any) -> Tuple[str, ...]:
    if isinstance(candidates, str) or not isinstance(candidates, Iterable):
        raise FieldMappingError(f"Candidates for field {field!r} must be a list of strings")
    seen: Dict[str, None] = {}
    for candidate in candidates:
        if not isinstance(candidate, str):
            raise FieldMappingError(f"Candidate {candidate!r} for field {field!r} is not a string")
        folded = candidate.strip().lower()
        if folded:
            seen.setdefault(folded, None)
    return tuple(seen)


def build_field_mapping(raw: Mapping[str, Iterable[str]]) -> FieldMapping:
    """Freeze ``raw`` into a read-only, case-folded :data:`FieldMapping`.

    Candidates keep their first-seen order.  Fields left with no usable
    candidate are dropped and therefore behave as unmapped.
    """

    if not isinstance(raw, Mapping):
        raise FieldMappingError("Field mapping must be an object of field name to candidate list")

    table: Dict[str, Tuple[str, ...]] = {}
    for field, candidates in raw.items():
        if not isinstance(field, str) or not field:
            raise FieldMappingError(f"Invalid field name: {field!r}")
        normalized = _normalize_candidates(field, candidates)
        if not normalized:
            logger.warning(f"Field {field} has no usable candidate labels; ignoring it")
            continue
        table[field] = normalized
    return MappingProxyType(table)


def load_field_mappings(path: Union[str, Path]) -> FieldMapping:
    """Load a JSON field mapping file."""

    mapping_path = Path(path)
    try:
        payload = json.loads(mapping_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise FieldMappingError(f"Cannot read field mapping file {mapping_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise FieldMappingError(f"Field mapping file {mapping_path} is not valid JSON: {exc}") from exc

    mapping = build_field_mapping(payload)
    logger.info(f"Loaded {len(mapping)} field mappings from {mapping_path}")
    return mapping


DEFAULT_FIELD_MAPPINGS: FieldMapping = build_field_mapping(_DEFAULT_TABLE)


__all__ = [
    "DEFAULT_FIELD_MAPPINGS",
    "FieldMapping",
    "FieldMappingError",
    "build_field_mapping",
    "load_field_mappings",
]
