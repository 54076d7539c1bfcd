"""
pantheon/services/name_converter.py

Name predicates and the decimal encoding used by the prefix sum.
"""

from __future__ import annotations

from typing import Callable


def name_to_decimal(name: str | None) -> int:
    """
    Concatenate the code point of each lowercased character into one integer.

    ``"Njord"`` -> ``110106111114100``. ``None`` and ``""`` encode to 0.
    """

    if not name:
        return 0
    value = 0
    for char in name.lower():
        code_point = ord(char)
        value = value * 10 ** len(str(code_point)) + code_point
    return value


def starts_with_ignore_case(prefix: str | None) -> Callable[[str | None], bool]:
    """
    Build a case-insensitive prefix predicate.

    A missing or empty prefix matches nothing.
    """

    if not prefix:
        return lambda _name: False

    lowered = prefix.lower()

    def _matches(name: str | None) -> bool:
        return name is not None and name.lower().startswith(lowered)

    return _matches
