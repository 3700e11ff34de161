"""Tests for docid/suite/test_case.py."""
from __future__ import annotations

from datetime import datetime

import pytest

from docid.classification.classifier import NOT_FOUND_RESULT, ClassificationResult
from docid.doctypes.registry import DocumentType
from docid.suite.test_case import (
    Expectation,
    ExpectationFormatError,
    TestCase,
    parse_expectation,
    split_numbered_payload,
)

VIN_RESULT = ClassificationResult(DocumentType.VIN, "XTA21099043456789", (0, 17))


# ---------------------------------------------------------------------------
# parse_expectation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("==VIN:XTA21099043456789", Expectation(DocumentType.VIN, "XTA21099043456789")),
        ("VIN:XTA21099043456789", Expectation(DocumentType.VIN, "XTA21099043456789")),
        ("=?OGRN:1027700132195", Expectation(DocumentType.OGRN, "1027700132195", negated=True)),
        ("NOT_FOUND", Expectation(DocumentType.NOT_FOUND)),
        ("==t1", Expectation(DocumentType.T1)),
        ("  snils : 112-233-445-95 ", Expectation(DocumentType.SNILS, "112-233-445-95")),
    ],
)
def test_parse_expectation(text: str, expected: Expectation):
    assert parse_expectation(text) == expected


@pytest.mark.parametrize("text", ["", "==", "=?", ":1009123848", "PASSPORT:1009123848", "SOMETHING"])
def test_parse_expectation_rejects(text: str):
    with pytest.raises(ExpectationFormatError):
        parse_expectation(text)


def test_expectation_format_error_is_value_error():
    assert issubclass(ExpectationFormatError, ValueError)


# ---------------------------------------------------------------------------
# split_numbered_payload
# ---------------------------------------------------------------------------

def test_split_positive_payload():
    assert split_numbered_payload("паспорт 1009 123848==PASSPORT_RF:1009123848") == (
        "паспорт 1009 123848",
        "==PASSPORT_RF:1009123848",
    )


def test_split_negative_payload():
    assert split_numbered_payload("BTT01234 =?T2:BTT01234") == ("BTT01234", "=?T2:BTT01234")


def test_split_uses_last_marker():
    assert split_numbered_payload("a==b=c==NOT_FOUND") == ("a==b=c", "==NOT_FOUND")


def test_split_without_marker_raises():
    with pytest.raises(ExpectationFormatError):
        split_numbered_payload("someTestCase")


# ---------------------------------------------------------------------------
# Expectation semantics
# ---------------------------------------------------------------------------

def test_positive_requires_type_and_value():
    assert Expectation(DocumentType.VIN, "XTA21099043456789").is_satisfied_by(VIN_RESULT)
    assert not Expectation(DocumentType.VIN, "XTA21099043456780").is_satisfied_by(VIN_RESULT)
    assert not Expectation(DocumentType.STS, "XTA21099043456789").is_satisfied_by(VIN_RESULT)


def test_empty_value_matches_any_value_of_type():
    assert Expectation(DocumentType.VIN).is_satisfied_by(VIN_RESULT)


def test_not_found_expectation():
    assert Expectation(DocumentType.NOT_FOUND).is_satisfied_by(NOT_FOUND_RESULT)
    assert not Expectation(DocumentType.NOT_FOUND).is_satisfied_by(VIN_RESULT)


def test_negative_satisfied_by_other_type_or_not_found():
    negative = Expectation(DocumentType.PASSPORT_RF, "1009123848", negated=True)
    assert negative.is_satisfied_by(VIN_RESULT)
    assert negative.is_satisfied_by(NOT_FOUND_RESULT)
    assert negative.is_satisfied_by(
        ClassificationResult(DocumentType.PASSPORT_RF, "1009123849", (0, 10))
    )
    assert not negative.is_satisfied_by(
        ClassificationResult(DocumentType.PASSPORT_RF, "1009123848", (0, 10))
    )


def test_encode_always_carries_marker():
    assert Expectation(DocumentType.T1, "BTT05127").encode() == "==T1:BTT05127"
    assert Expectation(DocumentType.NOT_FOUND, negated=True).encode() == "=?NOT_FOUND"


def test_encode_parses_back():
    expectation = Expectation(DocumentType.GRZ, "А123ВС77", negated=True)
    assert parse_expectation(expectation.encode()) == expectation


# ---------------------------------------------------------------------------
# TestCase
# ---------------------------------------------------------------------------

def test_numbered_test_id():
    case = TestCase(author="harisov", input="x", expected=Expectation(DocumentType.VIN), number=3)
    assert case.test_id == "harisov#3"


def test_published_test_id():
    case = TestCase(
        author="local",
        input="снилс 11223344595",
        expected=Expectation(DocumentType.SNILS),
        publish_time=datetime(2022, 10, 1, 12, 0),
    )
    assert case.test_id == "local:снилс 11223344595"


def test_key_keeps_author_and_identity_apart():
    numbered = TestCase(author="harisov", input="x", expected=Expectation(DocumentType.VIN), number=3)
    published = TestCase(author="a", input="b:c", expected=Expectation(DocumentType.VIN))
    assert numbered.key == ("harisov", 3)
    assert published.key == ("a", "b:c")
    assert published.key != TestCase(author="a:b", input="c", expected=Expectation(DocumentType.VIN)).key


def test_test_case_is_immutable():
    case = TestCase(author="a", input="x", expected=Expectation(DocumentType.VIN))
    with pytest.raises(AttributeError):
        case.author = "b"  # type: ignore[misc]
