"""Suite file validation and loading.

``validate_file()`` never stops at the first problem: every violation in the
file is collected as a line-tagged message and the overall verdict is a
single boolean.  ``load_test_cases()`` runs the same scan and refuses to
return cases from an invalid file.

Validation checks
-----------------
1. the file is not empty and has a header line
2. the header matches a known format exactly (or the format requested)
3. every data row has exactly the format's field count
4. ``number`` is an integer, ``isDisabled`` is ``true``/``false`` (empty
   means false), ``publishTime`` is empty or ISO-8601
5. the case key (author + number, or author + input) is unique in the file;
   numbers compare as integers, so ``1`` and ``01`` collide

Load checks
-----------
A valid file may still hold rows that cannot run: a numbered payload
without an ``==`` / ``=?`` marker, or an expectation naming an undeclared
type.  These are reported in ``ValidationResult.case_errors``; they do not
make the file invalid, but ``load_test_cases()`` refuses to return cases
until they are fixed.

Line numbers are 1-based physical line numbers; comment and blank lines are
counted but never reported.
"""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterator

from docid.doctypes.registry import REGISTRY, TypeRegistry
from docid.suite.formats import (
    COMMENT_PREFIX,
    DEFAULT_COLUMN_DELIMITER,
    FALLBACK_FORMAT,
    NUMBERED_FORMAT,
    SUITE_FORMATS,
    SuiteFormat,
    detect_format,
)
from docid.suite.test_case import (
    ExpectationFormatError,
    TestCase,
    parse_expectation,
    split_numbered_payload,
)

logger = logging.getLogger(__name__)


class SuiteFileError(ValueError):
    """Raised by ``load_test_cases()`` when the file cannot be loaded."""

    def __init__(self, validation: ValidationResult) -> None:
        self.validation = validation
        super().__init__(
            f"{validation.path}: {len(validation.all_errors)} error(s)"
        )


@dataclass
class ValidationResult:
    """Aggregated verdict for one suite file.

    ``errors`` holds validation failures; ``case_errors`` holds rows that
    pass validation but cannot be turned into runnable cases.
    """

    path: str
    suite_format: SuiteFormat | None = None
    errors: list[str] = field(default_factory=list)
    case_errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def is_loadable(self) -> bool:
        return not self.errors and not self.case_errors

    @property
    def all_errors(self) -> list[str]:
        return self.errors + self.case_errors

    def add(self, line_number: int, message: str) -> None:
        self.errors.append(form_error_message(line_number, message))

    def add_case_error(self, line_number: int, message: str) -> None:
        self.case_errors.append(form_error_message(line_number, message))

    def log_errors(self, log: logging.Logger = logger) -> None:
        for message in self.all_errors:
            log.warning("%s: %s", self.path, message)


def form_error_message(line_number: int, message: str) -> str:
    return f"Line {line_number}: {message}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_file(
    path: str | Path,
    suite_format: SuiteFormat | None = None,
    registry: TypeRegistry = REGISTRY,
) -> ValidationResult:
    """Validate a suite file and return every violation found.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    """
    path = Path(path)
    return validate_text(path.read_text(encoding="utf-8-sig"), str(path), suite_format, registry)


def validate_text(
    text: str,
    source: str = "<text>",
    suite_format: SuiteFormat | None = None,
    registry: TypeRegistry = REGISTRY,
) -> ValidationResult:
    """Validate suite content already held in memory."""
    validation, _ = _scan(text, source, suite_format, registry)
    return validation


def load_test_cases(
    path: str | Path,
    suite_format: SuiteFormat | None = None,
    registry: TypeRegistry = REGISTRY,
) -> list[TestCase]:
    """Return the test cases of a valid suite file.

    Raises
    ------
    SuiteFileError
        If the file fails validation or holds a row without a usable
        expectation; ``exc.validation`` holds the messages.
    FileNotFoundError
        If *path* does not exist.
    """
    path = Path(path)
    return load_text(path.read_text(encoding="utf-8-sig"), str(path), suite_format, registry)


def load_text(
    text: str,
    source: str = "<text>",
    suite_format: SuiteFormat | None = None,
    registry: TypeRegistry = REGISTRY,
) -> list[TestCase]:
    """Return the test cases of valid in-memory suite content.

    Raises
    ------
    SuiteFileError
        If the content fails validation or holds a row without a usable
        expectation.
    """
    validation, cases = _scan(text, source, suite_format, registry)
    if not validation.is_loadable:
        validation.log_errors()
        raise SuiteFileError(validation)
    logger.info(
        "loaded %d test case(s) from %s (%s format)",
        len(cases),
        validation.path,
        validation.suite_format.name,
    )
    return cases


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------

def _scan(
    text: str,
    source: str,
    suite_format: SuiteFormat | None,
    registry: TypeRegistry,
) -> tuple[ValidationResult, list[TestCase]]:
    validation = ValidationResult(path=source)
    cases: list[TestCase] = []

    if not text:
        validation.errors.append("File is empty")
        return validation, cases

    records = _iter_records(text)
    header = next(records, None)
    if header is None:
        validation.errors.append("File does not contain a header line")
        return validation, cases

    header_line, header_fields = header
    actual_header = DEFAULT_COLUMN_DELIMITER.join(header_fields or [])
    if suite_format is None:
        suite_format = detect_format(actual_header)
        if suite_format is None:
            known = " or ".join(f"`{f.header}`" for f in SUITE_FORMATS.values())
            validation.add(header_line, f"Header `{actual_header}` matches no known format; expected {known}")
            suite_format = FALLBACK_FORMAT
    elif actual_header != suite_format.header:
        validation.add(header_line, f"Expected header `{suite_format.header}`, found `{actual_header}`")
    validation.suite_format = suite_format

    first_seen: dict[tuple[str | int, ...], int] = {}
    key_label = "+".join(suite_format.key_columns)

    for line_number, fields in records:
        if fields is None:
            validation.add(line_number, "Line could not be parsed as delimited text")
            continue
        if len(fields) != suite_format.fields_count:
            validation.add(
                line_number,
                f"Expected {suite_format.fields_count} fields, found {len(fields)}",
            )
            continue

        row = dict(zip(suite_format.columns, fields))
        key = _row_key(row, suite_format)
        if key in first_seen:
            validation.add(
                line_number,
                f"Lines {first_seen[key]} and {line_number} share the same {key_label}",
            )
        else:
            first_seen[key] = line_number

        case, problems, case_problems = _parse_row(row, line_number, suite_format, registry, source)
        for problem in problems:
            validation.add(line_number, problem)
        for problem in case_problems:
            validation.add_case_error(line_number, problem)
        if case is not None:
            cases.append(case)

    return validation, cases


def _row_key(row: dict[str, str], suite_format: SuiteFormat) -> tuple[str | int, ...]:
    """Key a row the way ``TestCase.key`` keys the case built from it."""
    key: list[str | int] = []
    for column in suite_format.key_columns:
        value = row[column]
        if column == "number":
            try:
                key.append(int(value))
                continue
            except ValueError:
                pass
        key.append(value)
    return tuple(key)


def _iter_records(text: str) -> Iterator[tuple[int, list[str] | None]]:
    """Yield ``(line_number, trimmed fields)`` for every non-comment, non-blank line."""
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith(COMMENT_PREFIX):
            continue
        try:
            row = next(csv.reader([line], delimiter=DEFAULT_COLUMN_DELIMITER, quoting=csv.QUOTE_NONE))
        except csv.Error:
            yield line_number, None
            continue
        yield line_number, [value.strip() for value in row]


def _parse_row(
    row: dict[str, str],
    line_number: int,
    suite_format: SuiteFormat,
    registry: TypeRegistry,
    source: str,
) -> tuple[TestCase | None, list[str], list[str]]:
    """Return the case plus validation problems and load-only problems."""
    problems: list[str] = []
    case_problems: list[str] = []

    if not row["author"]:
        problems.append("author is empty")

    try:
        is_disabled = _parse_bool(row["isDisabled"])
    except ValueError as exc:
        problems.append(str(exc))
        is_disabled = False

    number: int | None = None
    publish_time: datetime | None = None
    if suite_format is NUMBERED_FORMAT:
        try:
            number = int(row["number"])
        except ValueError:
            problems.append(f"number {row['number']!r} is not an integer")
        payload = row["stringToProcessed"]
        try:
            raw_input, expected_text = split_numbered_payload(payload)
        except ExpectationFormatError as exc:
            case_problems.append(str(exc))
            raw_input, expected_text = payload, None
    else:
        raw_input, expected_text = row["input"], row["expected"]
        try:
            publish_time = _parse_time(row["publishTime"])
        except ValueError as exc:
            problems.append(str(exc))

    if not raw_input:
        problems.append("input is empty")

    expected = None
    if expected_text is not None:
        try:
            expected = parse_expectation(expected_text, registry)
        except ExpectationFormatError as exc:
            case_problems.append(f"expectation {expected_text!r} is invalid: {exc}")

    if problems or expected is None:
        return None, problems, case_problems

    return TestCase(
        author=row["author"],
        input=raw_input,
        expected=expected,
        is_disabled=is_disabled,
        comment_on_failure=row["commentOnFailure"],
        publish_time=publish_time,
        number=number,
        line_number=line_number,
        source=source,
    ), problems, case_problems


def _parse_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered in ("", "false"):
        return False
    if lowered == "true":
        return True
    raise ValueError(f"isDisabled {text!r} is not a boolean (true/false)")


def _parse_time(text: str) -> datetime | None:
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"publishTime {text!r} is not an ISO-8601 timestamp") from None
