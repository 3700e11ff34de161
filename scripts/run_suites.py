#!/usr/bin/env python3
"""Run every suite listed in the manifest and report per-file results.

Usage:
    python scripts/run_suites.py                    # manifest from SUITE_MANIFEST / .env
    python scripts/run_suites.py config/suites.yaml

Exit status is 0 when every enabled case passes, 1 when any case fails and
2 when a suite file cannot be loaded.
"""
from __future__ import annotations

import sys

# Ensure project root is on sys.path
sys.path.insert(0, ".")

from docid.core.logging import setup_logging
from docid.core.settings import get_settings
from docid.suite.loader import SuiteFileError
from docid.suite.manifest import load_manifest
from docid.suite.runner import SuiteRunner, run_suite_files


def main(argv: list[str]) -> int:
    setup_logging()
    settings = get_settings()
    manifest_path = argv[1] if len(argv) > 1 else settings.suite_manifest

    suites = load_manifest(manifest_path)
    runner = SuiteRunner(max_workers=settings.suite_max_workers)
    try:
        reports = run_suite_files(suites, runner)
    except SuiteFileError as exc:
        for message in exc.validation.all_errors:
            print(f"{exc.validation.path}: {message}")
        return 2
    except ValueError as exc:
        print(exc)
        return 2

    all_ok = True
    for path, report in reports.items():
        print(f"{path}: {report.summary()}")
        for outcome in report.failures():
            print(f"  FAIL {outcome.case.test_id} (line {outcome.case.line_number}): {outcome.message}")
        all_ok = all_ok and report.ok
    return 0 if all_ok else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
