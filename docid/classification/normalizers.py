"""Per-type normalization: raw text -> candidate normalized values.

Normalization is type-dependent, so the classifier never normalizes the raw
string once globally.  Each normalizer instead:

1. finds *fragments*: maximal runs of characters from its alphabet,
2. groups fragments separated only by whitespace or dashes,
3. yields every window of consecutive fragments inside a group, left to
   right by first fragment and longest window first,
4. maps each window's concatenated text through its transform.

Example: ``"паспорт Харисов Д.И. 1009 123848"`` gives the ``digits``
normalizer the fragments ``1009`` and ``123848`` in one group, so the
windows are ``1009123848``, ``1009`` and ``123848``.

Safety rule: raw values are never logged.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterator

#: Upper bound on fragments joined into a single candidate.
MAX_WINDOW_FRAGMENTS: int = 6

_LETTERS = "A-Za-zА-Яа-яЁё"

# Digit runs glued to letters belong to an alphanumeric token, not a number.
_DIGIT_FRAGMENT_RE = re.compile(rf"(?<![0-9{_LETTERS}])[0-9]+(?![0-9{_LETTERS}])")
_ALNUM_FRAGMENT_RE = re.compile(rf"[0-9{_LETTERS}]+")
_GAP_RE = re.compile(r"[\s\-–—]+")

# Letters that look identical in both alphabets (plates, VINs typed on
# a Russian keyboard layout).
_CYRILLIC_LOOKALIKES = "АВЕКМНОРСТУХ"
_LATIN_LOOKALIKES = "ABEKMHOPCTYX"
_CYRILLIC_TO_LATIN = str.maketrans(_CYRILLIC_LOOKALIKES, _LATIN_LOOKALIKES)
_LATIN_TO_CYRILLIC = str.maketrans(_LATIN_LOOKALIKES, _CYRILLIC_LOOKALIKES)


@dataclass(frozen=True)
class Candidate:
    """A normalized value and the raw span it was built from."""
    value: str
    start: int
    end: int

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass(frozen=True)
class Normalizer:
    name: str
    fragment_re: re.Pattern[str]
    transform: Callable[[str], str]

    def candidates(self, raw: str) -> Iterator[Candidate]:
        """Yield candidate values for *raw* in deterministic order."""
        for group in self._groups(raw):
            for first in range(len(group)):
                last = min(len(group), first + MAX_WINDOW_FRAGMENTS)
                for stop in range(last, first, -1):
                    window = group[first:stop]
                    joined = "".join(m.group() for m in window)
                    yield Candidate(
                        value=self.transform(joined),
                        start=window[0].start(),
                        end=window[-1].end(),
                    )

    def _groups(self, raw: str) -> list[list[re.Match[str]]]:
        groups: list[list[re.Match[str]]] = []
        current: list[re.Match[str]] = []
        for match in self.fragment_re.finditer(raw):
            if current and not _GAP_RE.fullmatch(raw, current[-1].end(), match.start()):
                groups.append(current)
                current = []
            current.append(match)
        if current:
            groups.append(current)
        return groups


# ---------------------------------------------------------------------------
# Transforms
# ---------------------------------------------------------------------------

def _identity(text: str) -> str:
    return text


def _format_snils(digits: str) -> str:
    """``12345678901`` -> ``123-456-789-01``; other lengths pass through."""
    if len(digits) != 11:
        return digits
    return f"{digits[:3]}-{digits[3:6]}-{digits[6:9]}-{digits[9:]}"


def _to_latin(text: str) -> str:
    return text.upper().translate(_CYRILLIC_TO_LATIN)


def _to_cyrillic(text: str) -> str:
    return text.upper().translate(_LATIN_TO_CYRILLIC)


def _upper(text: str) -> str:
    return text.upper()


NORMALIZERS: dict[str, Normalizer] = {
    "digits": Normalizer("digits", _DIGIT_FRAGMENT_RE, _identity),
    "snils": Normalizer("snils", _DIGIT_FRAGMENT_RE, _format_snils),
    "latin_alnum": Normalizer("latin_alnum", _ALNUM_FRAGMENT_RE, _to_latin),
    "cyrillic_plate": Normalizer("cyrillic_plate", _ALNUM_FRAGMENT_RE, _to_cyrillic),
    "mixed_alnum": Normalizer("mixed_alnum", _ALNUM_FRAGMENT_RE, _upper),
}


def get_normalizer(name: str) -> Normalizer:
    """Return the normalizer registered as *name* or raise ``KeyError``."""
    try:
        return NORMALIZERS[name]
    except KeyError:
        raise KeyError(f"Normalizer not found: {name!r}")
