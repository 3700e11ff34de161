"""Document type registry: the closed set of recognised identifier types.

Every classifiable type is one row in ``DOC_TYPE_DEFINITIONS``: a stable
code, a canonical uppercase name, the regex a *normalized* value must match,
the normalizer that produces such values from raw text, and an optional
secondary validator.  Adding a type means adding a row; matching logic in
``docid.classification`` never branches on individual types.

Code ranges
-----------
0           UNDEFINED sentinel: no classification attempted
1 – 99      production types
100         NOT_FOUND sentinel: classification attempted, nothing matched
1000+       test-only types used to exercise the conformance framework

Declaration order of ``DOC_TYPE_DEFINITIONS`` is the classification
priority order.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator

from docid.doctypes.validators import (
    SecondaryValidator,
    t1_short_form_check,
    t2_has_five_check,
)

# ---------------------------------------------------------------------------
# Faults
# ---------------------------------------------------------------------------


class DocTypeError(Exception):
    """Base class for caller-facing registry faults."""


class UnknownTypeName(DocTypeError, ValueError):
    """Raised when a string does not name any declared document type."""


class UnknownTypeCode(DocTypeError, LookupError):
    """Raised when an integer code is outside the declared set."""


class TypeHasNoPattern(DocTypeError, LookupError):
    """Raised when a pattern is requested for a sentinel type."""


class RegistryConfigurationError(RuntimeError):
    """Raised at import time when the definition table is inconsistent."""


# ---------------------------------------------------------------------------
# Enumeration
# ---------------------------------------------------------------------------


class DocumentType(IntEnum):
    UNDEFINED = 0

    PASSPORT_RF = 1
    DRIVER_LICENSE = 2
    VIN = 3
    STS = 4
    GRZ = 5
    INN_FL = 6
    INN_UL = 7
    OGRN = 8
    OGRNIP = 9
    SNILS = 10

    NOT_FOUND = 100

    T1 = 1000
    T2 = 1001


SENTINEL_TYPES: frozenset[DocumentType] = frozenset({
    DocumentType.UNDEFINED,
    DocumentType.NOT_FOUND,
})


# ---------------------------------------------------------------------------
# Definition row
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DocTypeDefinition:
    """One classifiable document type.

    Attributes
    ----------
    doc_type:     Enumeration member; its ``name`` is the canonical name.
    pattern:      Regex for a normalized value, matched with ``fullmatch``.
    normalizer:   Key into ``docid.classification.normalizers.NORMALIZERS``.
    description:  Human-readable label.
    validator:    Optional secondary check applied after the pattern matches.
    """
    doc_type: DocumentType
    pattern: str
    normalizer: str
    description: str
    validator: SecondaryValidator | None = None

    @property
    def code(self) -> int:
        return int(self.doc_type)

    @property
    def name(self) -> str:
        return self.doc_type.name


# ---------------------------------------------------------------------------
# Definition table (priority order)
# ---------------------------------------------------------------------------

DOC_TYPE_DEFINITIONS: list[DocTypeDefinition] = [

    # =====================================================================
    # Production types
    # =====================================================================

    DocTypeDefinition(
        doc_type=DocumentType.PASSPORT_RF,
        pattern=r"^\d{10}$",
        normalizer="digits",
        description="Russian national passport (series + number)",
    ),
    DocTypeDefinition(
        # Same shape as PASSPORT_RF; only reachable through classify_all().
        doc_type=DocumentType.DRIVER_LICENSE,
        pattern=r"^\d{10}$",
        normalizer="digits",
        description="Driver's license",
    ),
    DocTypeDefinition(
        doc_type=DocumentType.VIN,
        pattern=r"^[A-Z0-9]{17}$",
        normalizer="latin_alnum",
        description="Vehicle identification number",
    ),
    DocTypeDefinition(
        doc_type=DocumentType.STS,
        pattern=r"^\d{2}[А-ЯA-Z0-9]{2}\d{6}$",
        normalizer="mixed_alnum",
        description="Vehicle registration certificate",
    ),
    DocTypeDefinition(
        doc_type=DocumentType.GRZ,
        pattern=r"^[АВЕКМНОРСТУХ]\d{3}[АВЕКМНОРСТУХ]{2}\d{2,3}$",
        normalizer="cyrillic_plate",
        description="Vehicle registration plate",
    ),
    DocTypeDefinition(
        doc_type=DocumentType.INN_FL,
        pattern=r"^\d{12}$",
        normalizer="digits",
        description="Taxpayer number of an individual",
    ),
    DocTypeDefinition(
        doc_type=DocumentType.INN_UL,
        pattern=r"^\d{10}$",
        normalizer="digits",
        description="Taxpayer number of a legal entity",
    ),
    DocTypeDefinition(
        doc_type=DocumentType.OGRN,
        pattern=r"^\d{13}$",
        normalizer="digits",
        description="Primary state registration number of a legal entity",
    ),
    DocTypeDefinition(
        doc_type=DocumentType.OGRNIP,
        pattern=r"^\d{15}$",
        normalizer="digits",
        description="Primary state registration number of a sole proprietor",
    ),
    DocTypeDefinition(
        doc_type=DocumentType.SNILS,
        pattern=r"^\d{3}-\d{3}-\d{3}-\d{2}$",
        normalizer="snils",
        description="Individual insurance account number",
    ),

    # =====================================================================
    # Test-only types
    # =====================================================================

    DocTypeDefinition(
        doc_type=DocumentType.T1,
        pattern=r"^BTT[01]\d{4,5}$",
        normalizer="latin_alnum",
        description="Test type with a length-conditioned positional rule",
        validator=t1_short_form_check,
    ),
    DocTypeDefinition(
        doc_type=DocumentType.T2,
        pattern=r"^BTT[02]\d{4}$",
        normalizer="latin_alnum",
        description="Test type requiring a 5 in the numeric tail",
        validator=t2_has_five_check,
    ),
]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TypeRegistry:
    """Immutable lookup over a definition table.

    Built once at import time; every public method is read-only, so a single
    instance is shared freely across threads.
    """

    def __init__(self, definitions: list[DocTypeDefinition]) -> None:
        self._definitions: tuple[DocTypeDefinition, ...] = tuple(definitions)
        self._by_type: dict[DocumentType, DocTypeDefinition] = {}
        self._patterns: dict[DocumentType, re.Pattern[str]] = {}

        seen_names: set[str] = set()
        for definition in self._definitions:
            name = definition.name
            if definition.doc_type in SENTINEL_TYPES:
                raise RegistryConfigurationError(f"Sentinel {name} cannot be classifiable")
            if definition.doc_type in self._by_type:
                raise RegistryConfigurationError(f"Duplicate type code {definition.code} ({name})")
            if name in seen_names or name != name.upper():
                raise RegistryConfigurationError(f"Type name {name!r} is duplicated or not uppercase")
            if not definition.pattern:
                raise RegistryConfigurationError(f"Type {name} has an empty pattern")
            try:
                compiled = re.compile(definition.pattern)
            except re.error as exc:
                raise RegistryConfigurationError(
                    f"Type {name} has a malformed pattern {definition.pattern!r}: {exc}"
                ) from exc
            seen_names.add(name)
            self._by_type[definition.doc_type] = definition
            self._patterns[definition.doc_type] = compiled

        self._names: dict[str, DocumentType] = {member.name: member for member in DocumentType}

    def __iter__(self) -> Iterator[DocTypeDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def parse(self, name: str) -> DocumentType:
        """Return the type named *name* (case-insensitive, sentinels included)."""
        key = name.strip().upper() if isinstance(name, str) else None
        if not key or key not in self._names:
            raise UnknownTypeName(f"Unknown document type name: {name!r}")
        return self._names[key]

    def render(self, doc_type: DocumentType | int) -> str:
        """Return the canonical name for a type or its integer code."""
        try:
            return DocumentType(int(doc_type)).name
        except (ValueError, TypeError):
            raise UnknownTypeCode(f"Unknown document type code: {doc_type!r}") from None

    def definition_for(self, doc_type: DocumentType | int) -> DocTypeDefinition:
        member = self._coerce(doc_type)
        try:
            return self._by_type[member]
        except KeyError:
            raise TypeHasNoPattern(f"{member.name} has no definition in this registry") from None

    def pattern_for(self, doc_type: DocumentType | int) -> re.Pattern[str]:
        """Return the compiled normalized-value pattern for *doc_type*."""
        member = self._coerce(doc_type)
        try:
            return self._patterns[member]
        except KeyError:
            raise TypeHasNoPattern(f"{member.name} has no pattern in this registry") from None

    def classifiable_types(self) -> list[DocumentType]:
        """Return classifiable types in priority order."""
        return [d.doc_type for d in self._definitions]

    def _coerce(self, doc_type: DocumentType | int) -> DocumentType:
        if isinstance(doc_type, DocumentType):
            return doc_type
        self.render(doc_type)
        return DocumentType(int(doc_type))


REGISTRY = TypeRegistry(DOC_TYPE_DEFINITIONS)


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def parse(name: str) -> DocumentType:
    return REGISTRY.parse(name)


def render(doc_type: DocumentType | int) -> str:
    return REGISTRY.render(doc_type)


def pattern_for(doc_type: DocumentType | int) -> re.Pattern[str]:
    return REGISTRY.pattern_for(doc_type)
