"""Secondary validators: positional rules a normalized-value regex cannot express.

A validator receives a value that has already matched its type's pattern and
returns True when the value is acceptable.  Validators are exact checks over
character positions; they never normalize or fuzzy-match.
"""
from __future__ import annotations

from typing import Callable

SecondaryValidator = Callable[[str], bool]


def t1_short_form_check(value: str) -> bool:
    """Return True unless an 8-character T1 value breaks its positional rule.

    The 9-character form is fully described by the pattern.  The 8-character
    form must carry ``5`` at index 4 and ``7`` as its last character.
    """
    if len(value) != 8:
        return True
    return value[4] == "5" and value[-1] == "7"


def t2_has_five_check(value: str) -> bool:
    """Return True if a ``5`` appears at index 4 or later."""
    return "5" in value[4:]
