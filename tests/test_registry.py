"""Tests for docid/doctypes/registry.py and docid/doctypes/validators.py.

Covers:
  - parse/render round-trip for every declared name, case-insensitively
  - unknown names and codes raise typed faults, never NOT_FOUND
  - sentinels parse and render but have no pattern
  - pattern_for() fullmatches a canonical value of every classifiable type
  - declaration order is priority order; sentinels are never classifiable
  - malformed tables fail at construction time
  - T1 / T2 secondary validators
"""
from __future__ import annotations

import re

import pytest

from docid.doctypes.registry import (
    DOC_TYPE_DEFINITIONS,
    REGISTRY,
    DocTypeDefinition,
    DocTypeError,
    DocumentType,
    RegistryConfigurationError,
    TypeHasNoPattern,
    TypeRegistry,
    UnknownTypeCode,
    UnknownTypeName,
    parse,
    pattern_for,
    render,
)
from docid.doctypes.validators import t1_short_form_check, t2_has_five_check

CANONICAL_VALUES: dict[DocumentType, str] = {
    DocumentType.PASSPORT_RF: "1009123848",
    DocumentType.DRIVER_LICENSE: "9900123456",
    DocumentType.VIN: "XTA21099043456789",
    DocumentType.STS: "77УК123456",
    DocumentType.GRZ: "А123ВС77",
    DocumentType.INN_FL: "500100732259",
    DocumentType.INN_UL: "7707083893",
    DocumentType.OGRN: "1027700132195",
    DocumentType.OGRNIP: "304500116000157",
    DocumentType.SNILS: "112-233-445-95",
    DocumentType.T1: "BTT112345",
    DocumentType.T2: "BTT05120",
}


# ---------------------------------------------------------------------------
# parse / render
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("doc_type", list(DocumentType), ids=lambda t: t.name)
def test_render_parse_round_trip(doc_type: DocumentType):
    name = render(doc_type)
    assert name == doc_type.name
    assert render(parse(name)) == name
    assert render(parse(name.lower())) == name


def test_parse_trims_whitespace():
    assert parse("  vin ") is DocumentType.VIN


def test_parse_mixed_case():
    assert parse("Passport_Rf") is DocumentType.PASSPORT_RF


@pytest.mark.parametrize("name", ["PASSPORT", "PASS", "", "   ", "VIN2", "INN"])
def test_parse_rejects_unknown_and_partial_names(name: str):
    with pytest.raises(UnknownTypeName):
        parse(name)


def test_parse_rejects_non_string():
    with pytest.raises(UnknownTypeName):
        REGISTRY.parse(None)  # type: ignore[arg-type]


def test_render_accepts_integer_codes():
    assert render(1) == "PASSPORT_RF"
    assert render(100) == "NOT_FOUND"
    assert render(1001) == "T2"


@pytest.mark.parametrize("code", [-1, 11, 99, 101, 999, 1002])
def test_render_rejects_undeclared_codes(code: int):
    with pytest.raises(UnknownTypeCode):
        render(code)


def test_fault_hierarchy():
    assert issubclass(UnknownTypeName, DocTypeError)
    assert issubclass(UnknownTypeName, ValueError)
    assert issubclass(UnknownTypeCode, DocTypeError)
    assert issubclass(UnknownTypeCode, LookupError)
    assert issubclass(TypeHasNoPattern, LookupError)


def test_sentinels_are_distinct():
    assert DocumentType.UNDEFINED != DocumentType.NOT_FOUND
    assert render(DocumentType.UNDEFINED) != render(DocumentType.NOT_FOUND)


# ---------------------------------------------------------------------------
# pattern_for
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("doc_type", list(CANONICAL_VALUES), ids=lambda t: t.name)
def test_pattern_matches_canonical_value(doc_type: DocumentType):
    assert pattern_for(doc_type).fullmatch(CANONICAL_VALUES[doc_type])


def test_every_classifiable_type_has_a_canonical_value():
    assert set(REGISTRY.classifiable_types()) == set(CANONICAL_VALUES)


def test_pattern_for_returns_compiled_pattern():
    assert isinstance(pattern_for(DocumentType.VIN), re.Pattern)
    assert pattern_for(DocumentType.VIN) is pattern_for(DocumentType.VIN)


def test_pattern_for_accepts_integer_code():
    assert pattern_for(10).fullmatch("112-233-445-95")


@pytest.mark.parametrize("sentinel", [DocumentType.UNDEFINED, DocumentType.NOT_FOUND])
def test_pattern_for_sentinel_raises(sentinel: DocumentType):
    with pytest.raises(TypeHasNoPattern):
        pattern_for(sentinel)


def test_pattern_for_unknown_code_raises():
    with pytest.raises(UnknownTypeCode):
        pattern_for(42)


def test_vin_pattern_rejects_lowercase():
    assert not pattern_for(DocumentType.VIN).fullmatch("xta21099043456789")


def test_grz_pattern_rejects_latin_letters():
    assert not pattern_for(DocumentType.GRZ).fullmatch("A123BC77")


# ---------------------------------------------------------------------------
# Table shape
# ---------------------------------------------------------------------------

def test_priority_order_is_declaration_order():
    assert REGISTRY.classifiable_types() == [d.doc_type for d in DOC_TYPE_DEFINITIONS]
    assert REGISTRY.classifiable_types()[0] is DocumentType.PASSPORT_RF


def test_sentinels_are_not_classifiable():
    types = REGISTRY.classifiable_types()
    assert DocumentType.UNDEFINED not in types
    assert DocumentType.NOT_FOUND not in types


def test_code_ranges():
    for definition in REGISTRY:
        if definition.name.startswith("T"):
            assert definition.code >= 1000
        else:
            assert 0 < definition.code < 100


def test_every_definition_has_pattern_and_normalizer():
    for definition in REGISTRY:
        assert definition.pattern
        assert definition.normalizer
        assert definition.description


def test_only_test_types_carry_secondary_validators():
    with_validators = {d.doc_type for d in REGISTRY if d.validator is not None}
    assert with_validators == {DocumentType.T1, DocumentType.T2}


def test_len_matches_table():
    assert len(REGISTRY) == len(DOC_TYPE_DEFINITIONS) == 12


# ---------------------------------------------------------------------------
# Construction faults
# ---------------------------------------------------------------------------

def _definition(doc_type: DocumentType, pattern: str = r"^\d+$") -> DocTypeDefinition:
    return DocTypeDefinition(doc_type=doc_type, pattern=pattern, normalizer="digits", description="x")


def test_duplicate_code_is_fatal():
    with pytest.raises(RegistryConfigurationError, match="Duplicate"):
        TypeRegistry([_definition(DocumentType.VIN), _definition(DocumentType.VIN)])


def test_malformed_pattern_is_fatal():
    with pytest.raises(RegistryConfigurationError, match="malformed"):
        TypeRegistry([_definition(DocumentType.VIN, r"^[A-Z$")])


def test_empty_pattern_is_fatal():
    with pytest.raises(RegistryConfigurationError, match="empty"):
        TypeRegistry([_definition(DocumentType.VIN, "")])


def test_sentinel_row_is_fatal():
    with pytest.raises(RegistryConfigurationError, match="Sentinel"):
        TypeRegistry([_definition(DocumentType.NOT_FOUND)])


def test_custom_registry_limits_classifiable_types():
    registry = TypeRegistry([_definition(DocumentType.OGRN, r"^\d{13}$")])
    assert registry.classifiable_types() == [DocumentType.OGRN]
    with pytest.raises(TypeHasNoPattern):
        registry.pattern_for(DocumentType.VIN)
    # Names stay total over the enumeration even for a reduced table.
    assert registry.parse("vin") is DocumentType.VIN


# ---------------------------------------------------------------------------
# Secondary validators
# ---------------------------------------------------------------------------

class TestT1ShortFormCheck:
    def test_short_form_with_five_and_seven(self):
        assert t1_short_form_check("BTT05127") is True

    def test_short_form_wrong_index_four(self):
        assert t1_short_form_check("BTT04127") is False

    def test_short_form_wrong_last_digit(self):
        assert t1_short_form_check("BTT05126") is False

    def test_long_form_is_unconstrained(self):
        assert t1_short_form_check("BTT112345") is True
        assert t1_short_form_check("BTT000000") is True


class TestT2HasFiveCheck:
    def test_five_in_tail(self):
        assert t2_has_five_check("BTT01235") is True

    def test_five_at_index_four(self):
        assert t2_has_five_check("BTT05000") is True

    def test_no_five(self):
        assert t2_has_five_check("BTT01234") is False

    def test_five_before_index_four_ignored(self):
        assert t2_has_five_check("5TT01234") is False
