"""Classifier: raw text -> (DocumentType, normalized value).

Algorithm
---------
For each classifiable type in registry priority order, walk the candidates
produced by that type's normalizer.  A candidate is accepted when it
fullmatches the type's pattern and passes the type's secondary validator
(if any).  The first accepted candidate of the first type wins; if no type
accepts any candidate the result is ``NOT_FOUND``.

Empty input, input without recognisable fragments and input whose only
pattern matches are rejected by a secondary validator all collapse to the
same ``NOT_FOUND`` result.  Callers that need to tell these apart use
``Classifier.explain()``.

The classifier holds no mutable state; one instance is safely shared
across threads.

Safety rule: raw values are never logged, only types, counts and lengths.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, Literal

from docid.classification.normalizers import Candidate, Normalizer, get_normalizer
from docid.doctypes.registry import (
    REGISTRY,
    DocTypeDefinition,
    DocumentType,
    RegistryConfigurationError,
    TypeRegistry,
)

logger = logging.getLogger(__name__)

AttemptOutcome = Literal["matched", "pattern_mismatch", "secondary_rejected"]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying one raw string.

    Fields
    ------
    doc_type:  Matched type, or ``DocumentType.NOT_FOUND``.
    value:     Normalized value; empty string for ``NOT_FOUND``.
    span:      ``(start, end)`` offsets of the consumed raw substring;
               ``None`` for ``NOT_FOUND``.
    """
    doc_type: DocumentType
    value: str = ""
    span: tuple[int, int] | None = None

    @property
    def matched(self) -> bool:
        return self.doc_type not in (DocumentType.NOT_FOUND, DocumentType.UNDEFINED)

    @property
    def type_name(self) -> str:
        return self.doc_type.name

    def as_tuple(self) -> tuple[str, str, bool]:
        return (self.type_name, self.value, self.matched)

    def encode(self) -> str:
        """Render as ``TYPE:value`` (bare ``TYPE`` when there is no value)."""
        return f"{self.type_name}:{self.value}" if self.value else self.type_name


NOT_FOUND_RESULT = ClassificationResult(doc_type=DocumentType.NOT_FOUND)


@dataclass(frozen=True)
class Attempt:
    doc_type: DocumentType
    value: str
    span: tuple[int, int]
    outcome: AttemptOutcome


@dataclass
class ClassificationTrace:
    """Debug output of ``Classifier.explain()``: the result plus every attempt."""
    result: ClassificationResult
    attempts: list[Attempt] = field(default_factory=list)

    def attempts_for(self, doc_type: DocumentType) -> list[Attempt]:
        return [a for a in self.attempts if a.doc_type == doc_type]


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

class Classifier:
    """Pure function object over a static ``TypeRegistry``."""

    def __init__(self, registry: TypeRegistry = REGISTRY) -> None:
        self._registry = registry
        self._plan: list[tuple[DocTypeDefinition, Normalizer]] = []
        for definition in registry:
            try:
                normalizer = get_normalizer(definition.normalizer)
            except KeyError as exc:
                raise RegistryConfigurationError(
                    f"Type {definition.name} names unknown normalizer {definition.normalizer!r}"
                ) from exc
            self._plan.append((definition, normalizer))

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    def classify(self, raw: str) -> ClassificationResult:
        """Return the first accepted match in priority order, or ``NOT_FOUND``."""
        for attempt in self._attempts(raw):
            if attempt.outcome == "matched":
                logger.debug(
                    "classifier: %s matched (input length=%d)",
                    attempt.doc_type.name,
                    len(raw),
                )
                return ClassificationResult(attempt.doc_type, attempt.value, attempt.span)
        logger.debug("classifier: no type matched (input length=%d)", len(raw or ""))
        return NOT_FOUND_RESULT

    def classify_all(self, raw: str) -> list[ClassificationResult]:
        """Return every distinct accepted match, in priority order."""
        results: list[ClassificationResult] = []
        seen: set[ClassificationResult] = set()
        for attempt in self._attempts(raw):
            if attempt.outcome != "matched":
                continue
            result = ClassificationResult(attempt.doc_type, attempt.value, attempt.span)
            if result not in seen:
                seen.add(result)
                results.append(result)
        return results

    def explain(self, raw: str) -> ClassificationTrace:
        """Classify *raw* and keep every per-type attempt for diagnostics."""
        trace = ClassificationTrace(result=NOT_FOUND_RESULT)
        for attempt in self._attempts(raw):
            trace.attempts.append(attempt)
            if attempt.outcome == "matched" and not trace.result.matched:
                trace.result = ClassificationResult(attempt.doc_type, attempt.value, attempt.span)
        return trace

    def _attempts(self, raw: str) -> Iterator[Attempt]:
        if not raw or not raw.strip():
            return
        for definition, normalizer in self._plan:
            pattern = self._registry.pattern_for(definition.doc_type)
            for candidate in normalizer.candidates(raw):
                yield Attempt(
                    doc_type=definition.doc_type,
                    value=candidate.value,
                    span=candidate.span,
                    outcome=_judge(definition, pattern, candidate),
                )


def _judge(
    definition: DocTypeDefinition,
    pattern: re.Pattern[str],
    candidate: Candidate,
) -> AttemptOutcome:
    if not pattern.fullmatch(candidate.value):
        return "pattern_mismatch"
    if definition.validator is not None and not definition.validator(candidate.value):
        return "secondary_rejected"
    return "matched"


_DEFAULT_CLASSIFIER = Classifier()


def classify(raw: str) -> ClassificationResult:
    """Classify *raw* with the default registry."""
    return _DEFAULT_CLASSIFIER.classify(raw)
