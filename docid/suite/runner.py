"""Suite runner: execute test cases against a classifier.

Each case is independent, so cases may run on a thread pool.  Outcomes are
keyed by ``TestCase.key`` (author + number, or author + input) and always
reported in input order, whatever order the pool finishes them in.

Safety rule: raw inputs are never logged, only authors, line numbers and
verdicts.
"""
from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass, field
from enum import Enum

from docid.classification.classifier import Classifier, ClassificationResult
from docid.suite.loader import load_test_cases
from docid.suite.manifest import SuiteFile
from docid.suite.test_case import TestCase

logger = logging.getLogger(__name__)


class CaseStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class CaseOutcome:
    case: TestCase
    status: CaseStatus
    actual: ClassificationResult | None = None

    @property
    def message(self) -> str:
        """Failure diagnostic; empty unless the case failed."""
        if self.status is not CaseStatus.FAILED:
            return ""
        actual = self.actual.encode() if self.actual is not None else "-"
        detail = f"expected {self.case.expected.encode()}, got {actual}"
        if self.case.comment_on_failure:
            return f"{self.case.comment_on_failure} ({detail})"
        return detail


@dataclass
class SuiteReport:
    outcomes: dict[tuple[str, int | str], CaseOutcome] = field(default_factory=dict)

    def _count(self, status: CaseStatus) -> int:
        return sum(1 for o in self.outcomes.values() if o.status is status)

    @property
    def passed(self) -> int:
        return self._count(CaseStatus.PASSED)

    @property
    def failed(self) -> int:
        return self._count(CaseStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self._count(CaseStatus.SKIPPED)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def failures(self) -> list[CaseOutcome]:
        return [o for o in self.outcomes.values() if o.status is CaseStatus.FAILED]

    def summary(self) -> str:
        return (
            f"{len(self.outcomes)} case(s): {self.passed} passed, "
            f"{self.failed} failed, {self.skipped} skipped"
        )


class SuiteRunner:
    """Run ``TestCase`` lists through a ``Classifier``.

    Parameters
    ----------
    classifier:
        Classifier under test.  Defaults to one over the built-in registry.
    max_workers:
        Thread pool size.  ``1`` runs cases sequentially in the caller's
        thread.
    """

    def __init__(self, classifier: Classifier | None = None, max_workers: int = 1) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.classifier = classifier or Classifier()
        self.max_workers = max_workers

    def run_case(self, case: TestCase) -> CaseOutcome:
        if case.is_disabled:
            return CaseOutcome(case=case, status=CaseStatus.SKIPPED)
        actual = self.classifier.classify(case.input)
        passed = case.expected.is_satisfied_by(actual)
        return CaseOutcome(
            case=case,
            status=CaseStatus.PASSED if passed else CaseStatus.FAILED,
            actual=actual,
        )

    def run(self, cases: list[TestCase]) -> SuiteReport:
        """Run *cases* and return outcomes keyed by ``TestCase.key``.

        Raises
        ------
        ValueError
            If two cases share a key.
        """
        keys = [case.key for case in cases]
        if len(set(keys)) != len(keys):
            raise ValueError("test case keys must be unique within a run")

        if self.max_workers == 1 or len(cases) < 2:
            results = {case.key: self.run_case(case) for case in cases}
        else:
            results = {}
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {executor.submit(self.run_case, case): case for case in cases}
                for future in concurrent.futures.as_completed(futures):
                    outcome = future.result()
                    results[outcome.case.key] = outcome

        report = SuiteReport(outcomes={key: results[key] for key in keys})
        for outcome in report.failures():
            logger.warning(
                "case by %s at line %s failed: %s",
                outcome.case.author,
                outcome.case.line_number,
                outcome.case.comment_on_failure,
            )
        logger.info("suite run finished: %s", report.summary())
        return report


def run_suite_files(suites: list[SuiteFile], runner: SuiteRunner | None = None) -> dict[str, SuiteReport]:
    """Load and run every suite file, keyed by file path.

    Raises
    ------
    SuiteFileError
        If any file fails to load; no case from any file has run yet.
    """
    runner = runner or SuiteRunner()
    loaded = [
        (str(suite.path), load_test_cases(suite.path, suite.suite_format))
        for suite in suites
    ]
    return {path: runner.run(cases) for path, cases in loaded}
