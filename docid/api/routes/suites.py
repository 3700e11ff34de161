"""Suite routes.

POST /suites/validate checks suite content and returns every line-tagged
violation, plus the rows that validate but cannot run.  POST /suites/run
loads, then runs every enabled case and returns the counts plus the failing
cases.  Content that cannot be loaded on /run yields 422 with both error
lists /validate would return.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from docid.api.deps import get_suite_runner
from docid.suite.formats import SuiteFormat, get_format
from docid.suite.loader import SuiteFileError, load_text, validate_text
from docid.suite.runner import SuiteRunner

router = APIRouter(prefix="/suites", tags=["suites"])


class SuiteBody(BaseModel):
    content: str = Field(max_length=1_000_000)
    format: str | None = None


class ValidationOut(BaseModel):
    valid: bool
    format: str | None
    errors: list[str]
    case_errors: list[str]


class FailureOut(BaseModel):
    test_id: str
    line_number: int | None
    expected: str
    actual: str | None
    message: str


class RunOut(BaseModel):
    total: int
    passed: int
    failed: int
    skipped: int
    failures: list[FailureOut]


def _resolve_format(name: str | None) -> SuiteFormat | None:
    if name is None:
        return None
    try:
        return get_format(name)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/validate", summary="Validate suite content", response_model=ValidationOut)
def validate_suite(body: SuiteBody) -> ValidationOut:
    validation = validate_text(body.content, "<request>", _resolve_format(body.format))
    return ValidationOut(
        valid=validation.is_valid,
        format=validation.suite_format.name if validation.suite_format else None,
        errors=validation.errors,
        case_errors=validation.case_errors,
    )


@router.post("/run", summary="Run suite content against the classifier", response_model=RunOut)
def run_suite(
    body: SuiteBody,
    runner: SuiteRunner = Depends(get_suite_runner),
) -> RunOut:
    try:
        cases = load_text(body.content, "<request>", _resolve_format(body.format))
    except SuiteFileError as exc:
        raise HTTPException(status_code=422, detail=exc.validation.all_errors)

    try:
        report = runner.run(cases)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return RunOut(
        total=len(report.outcomes),
        passed=report.passed,
        failed=report.failed,
        skipped=report.skipped,
        failures=[
            FailureOut(
                test_id=outcome.case.test_id,
                line_number=outcome.case.line_number,
                expected=outcome.case.expected.encode(),
                actual=outcome.actual.encode() if outcome.actual else None,
                message=outcome.message,
            )
            for outcome in report.failures()
        ],
    )
