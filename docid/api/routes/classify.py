"""POST /classify — classify one raw string.

The response always carries the single priority-order result.  Set
``all_matches`` to also receive every accepted match, and ``explain`` to
receive the per-type attempt trace.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from docid.api.deps import get_classifier
from docid.classification.classifier import Attempt, ClassificationResult, Classifier

router = APIRouter(tags=["classify"])


class ClassifyBody(BaseModel):
    text: str = Field(max_length=4096)
    all_matches: bool = False
    explain: bool = False


class MatchOut(BaseModel):
    type: str
    value: str
    matched: bool
    span: tuple[int, int] | None = None


class AttemptOut(BaseModel):
    type: str
    value: str
    span: tuple[int, int]
    outcome: str


class ClassifyOut(BaseModel):
    result: MatchOut
    matches: list[MatchOut] | None = None
    attempts: list[AttemptOut] | None = None


def _match_out(result: ClassificationResult) -> MatchOut:
    type_name, value, matched = result.as_tuple()
    return MatchOut(type=type_name, value=value, matched=matched, span=result.span)


def _attempt_out(attempt: Attempt) -> AttemptOut:
    return AttemptOut(
        type=attempt.doc_type.name,
        value=attempt.value,
        span=attempt.span,
        outcome=attempt.outcome,
    )


@router.post("/classify", summary="Classify a raw string", response_model=ClassifyOut)
def classify_text(
    body: ClassifyBody,
    classifier: Classifier = Depends(get_classifier),
) -> ClassifyOut:
    if body.explain:
        trace = classifier.explain(body.text)
        result = trace.result
        attempts = [_attempt_out(a) for a in trace.attempts]
    else:
        result = classifier.classify(body.text)
        attempts = None

    matches = None
    if body.all_matches:
        matches = [_match_out(r) for r in classifier.classify_all(body.text)]

    return ClassifyOut(result=_match_out(result), matches=matches, attempts=attempts)
