"""Suite manifest loader.

A manifest is a YAML document listing the suite files to run::

    suites:
      - path: ../suites/base.csv
        kind: BASE
      - path: ../suites/local.csv
        kind: LOCAL
        format: published     # optional; detected from the header otherwise

Relative paths resolve against the manifest's own directory.  ``BASE``
suites are shared by every implementation; ``LOCAL`` suites hold cases
specific to this one.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from docid.suite.formats import SuiteFormat, get_format

SUITE_KINDS: frozenset[str] = frozenset({"BASE", "LOCAL"})

_REQUIRED_FIELDS: frozenset[str] = frozenset({"path", "kind"})


@dataclass(frozen=True)
class SuiteFile:
    path: Path
    kind: str
    suite_format: SuiteFormat | None = None


def load_manifest(path: str | Path) -> list[SuiteFile]:
    """Load the suite file list from a YAML manifest.

    Raises
    ------
    ValueError
        If the document is not a mapping with a ``suites`` list, an entry
        misses a required field, or names an unknown kind or format.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict) or not isinstance(data.get("suites"), list):
        raise ValueError(f"{path}: expected a mapping with a 'suites' list")

    base_dir = path.parent
    suites: list[SuiteFile] = []
    for index, entry in enumerate(data["suites"]):
        if not isinstance(entry, dict):
            raise ValueError(f"{path}: suite #{index} must be a mapping")
        missing = _REQUIRED_FIELDS - entry.keys()
        if missing:
            raise ValueError(f"{path}: suite #{index} missing required fields: {sorted(missing)}")

        kind = str(entry["kind"]).upper()
        if kind not in SUITE_KINDS:
            raise ValueError(
                f"{path}: suite #{index} has unknown kind {entry['kind']!r}; "
                f"must be one of {sorted(SUITE_KINDS)}"
            )

        suite_path = Path(entry["path"])
        if not suite_path.is_absolute():
            suite_path = base_dir / suite_path

        fmt_name = entry.get("format")
        suites.append(SuiteFile(
            path=suite_path,
            kind=kind,
            suite_format=get_format(fmt_name) if fmt_name else None,
        ))
    return suites
