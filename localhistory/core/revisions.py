"""Revision ordinals for LocalHistory.

A path's history is the newest-first list of commits that touched it.
Ordinal 0 is the live file (the newest snapshot once the save was
committed), ordinal 1 the snapshot before it, and so on: ordinal `r`
is history entry `r`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

# Most revisions returned by a revision query.
MAX_REVISIONS = 10


@dataclass(frozen=True)
class Revision:
    """One entry of a path's history."""
    ordinal: int
    identifier: str
    fields: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, name: str) -> str:
        return self.fields[name]

    @property
    def label(self) -> str:
        """Human-readable age ("current", "previous", "3 versions ago")."""
        if self.ordinal == 0:
            return "current"
        if self.ordinal == 1:
            return "previous"
        return f"{self.ordinal} versions ago"


class RevisionIndex:
    """Maps revision ordinals onto backend commit identifiers."""

    def __init__(self, identifiers: Sequence[str]):
        """Initialize index.

        Args:
            identifiers: Commit ids touching the path, newest first
        """
        self._identifiers = list(identifiers)

    def __len__(self) -> int:
        return len(self._identifiers)

    def __bool__(self) -> bool:
        return bool(self._identifiers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._identifiers)

    @property
    def oldest_ordinal(self) -> int:
        """Largest valid ordinal (-1 when there is no history)."""
        return len(self._identifiers) - 1

    def contains(self, ordinal: int) -> bool:
        return 0 <= ordinal <= self.oldest_ordinal

    def identifier(self, ordinal: int) -> str:
        """Commit id for an ordinal.

        Raises:
            IndexError: If the ordinal is out of range
        """
        if not self.contains(ordinal):
            raise IndexError(f"revision {ordinal} out of range 0..{self.oldest_ordinal}")
        return self._identifiers[ordinal]

    @staticmethod
    def from_records(records: Sequence[dict[str, str]]) -> list[Revision]:
        """Number newest-first backend records into Revisions."""
        return [
            Revision(ordinal=ordinal, identifier=record["commit"], fields=dict(record))
            for ordinal, record in enumerate(records)
        ]
