"""
pantheon/domain/gods.py

Domain models for mythology lookups.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class MythologyUnavailableError(RuntimeError):
    """
    Raised by strict single-mythology lookups when the source cannot answer.
    """

    def __init__(self, mythology: str, reason: str) -> None:
        super().__init__(f"Failed to retrieve gods data for mythology '{mythology}': {reason}.")
        self.mythology = mythology
        self.reason = reason


class Mythology(str, Enum):
    GREEK = "greek"
    ROMAN = "roman"
    NORDIC = "nordic"
    INDIAN = "indian"
    CELTIBERIAN = "celtiberian"

    @classmethod
    def from_string(cls, value: str | None) -> "Mythology | None":
        if value is None:
            return None
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return None

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)


@dataclass(frozen=True)
class GodRecord:
    """
    One god name tagged with the mythology it came from.
    """

    id: int
    mythology: str
    name: str


@dataclass(frozen=True)
class GodsByMythology:
    mythology: str
    gods: list[str]
    source: str = "external_api"
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def count(self) -> int:
        return len(self.gods)
