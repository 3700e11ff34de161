"""FastAPI dependency injection — classifier and suite runner factories."""
from __future__ import annotations

from functools import lru_cache

from docid.classification.classifier import Classifier
from docid.core.settings import get_settings
from docid.suite.runner import SuiteRunner


@lru_cache(maxsize=1)
def get_classifier() -> Classifier:
    """Return the process-wide classifier over the built-in registry."""
    return Classifier()


def get_suite_runner() -> SuiteRunner:
    """Return a suite runner sized from ``SUITE_MAX_WORKERS``."""
    return SuiteRunner(get_classifier(), max_workers=get_settings().suite_max_workers)
