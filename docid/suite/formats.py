"""Suite file formats.

Two independent, versioned layouts exist.  Neither supersedes the other: a
file declares its layout through its header line, which must match one of
the headers below exactly.

numbered (5 fields)
    author | number | stringToProcessed | isDisabled | commentOnFailure

    ``stringToProcessed`` carries both the input and the expectation:
    ``<input>==<TYPE>[:value]`` or ``<input>=?<TYPE>[:value]``.
    Test id: author + number.

published (6 fields)
    author | input | expected | isDisabled | commentOnFailure | publishTime

    ``expected`` is ``[==|=?]<TYPE>[:value]``; without a marker the
    expectation is positive.  ``publishTime`` is empty or ISO-8601.
    Test id: author + input.

Common rules: ``|`` delimiter, lines starting with ``#`` are comments,
blank lines are ignored, fields are trimmed.
"""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_COLUMN_DELIMITER: str = "|"
COMMENT_PREFIX: str = "#"


@dataclass(frozen=True)
class SuiteFormat:
    """Layout of one versioned suite file format."""
    name: str
    columns: tuple[str, ...]
    key_columns: tuple[str, ...]

    @property
    def header(self) -> str:
        return DEFAULT_COLUMN_DELIMITER.join(self.columns)

    @property
    def fields_count(self) -> int:
        return len(self.columns)

    def index_of(self, column: str) -> int:
        return self.columns.index(column)


NUMBERED_FORMAT = SuiteFormat(
    name="numbered",
    columns=("author", "number", "stringToProcessed", "isDisabled", "commentOnFailure"),
    key_columns=("author", "number"),
)

PUBLISHED_FORMAT = SuiteFormat(
    name="published",
    columns=("author", "input", "expected", "isDisabled", "commentOnFailure", "publishTime"),
    key_columns=("author", "input"),
)

SUITE_FORMATS: dict[str, SuiteFormat] = {
    NUMBERED_FORMAT.name: NUMBERED_FORMAT,
    PUBLISHED_FORMAT.name: PUBLISHED_FORMAT,
}

#: Rows of a file whose header matches no known format are checked against this.
FALLBACK_FORMAT: SuiteFormat = NUMBERED_FORMAT


def detect_format(header: str) -> SuiteFormat | None:
    """Return the format whose header equals *header* (fields trimmed)."""
    normalized = DEFAULT_COLUMN_DELIMITER.join(
        part.strip() for part in header.split(DEFAULT_COLUMN_DELIMITER)
    )
    for suite_format in SUITE_FORMATS.values():
        if suite_format.header == normalized:
            return suite_format
    return None


def get_format(name: str) -> SuiteFormat:
    """Return the format called *name* or raise ``ValueError``."""
    try:
        return SUITE_FORMATS[name]
    except KeyError:
        raise ValueError(
            f"Unknown suite format {name!r}; must be one of {sorted(SUITE_FORMATS)}"
        ) from None
