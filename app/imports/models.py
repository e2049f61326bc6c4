from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class CsvRow:
    line: int
    values: dict[str, str]

    def get(self, column: str) -> Optional[str]:
        value = self.values.get(column)
        return value if value else None


@dataclass(frozen=True)
class CsvTemplate:
    headers: list[str]
    required: list[str]
    example: dict[str, str]
    optional: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RowSuccess:
    line: int
    name: str
    record: object
    created_ids: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class RowFailure:
    line: int
    name: str
    reason: str


RowOutcome = Union[RowSuccess, RowFailure]


@dataclass
class EntityTally:
    created: int = 0
    existing: int = 0
    failed: int = 0


@dataclass
class RowChanges:
    """Lookup hits collected while a row is processed.

    Only merged into the import summary once the row has committed.
    """

    created: list[str] = field(default_factory=list)
    existing: list[str] = field(default_factory=list)

    def record(self, entity: str, created: bool) -> None:
        (self.created if created else self.existing).append(entity)


@dataclass
class ImportSummary:
    total: int = 0
    successful: int = 0
    failed: int = 0
    details: dict[str, EntityTally] = field(default_factory=dict)

    def tally(self, entity: str) -> EntityTally:
        return self.details.setdefault(entity, EntityTally())

    def apply(self, changes: RowChanges) -> None:
        for entity in changes.created:
            self.tally(entity).created += 1
        for entity in changes.existing:
            self.tally(entity).existing += 1


@dataclass
class ImportResult:
    entity: str
    summary: ImportSummary
    outcomes: list[RowOutcome] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [
            f"Line {outcome.line}: '{outcome.name}': {outcome.reason}"
            for outcome in self.outcomes
            if isinstance(outcome, RowFailure)
        ]


class ImportParseError(Exception):
    def __init__(self, message: str, location: str = "csv") -> None:
        super().__init__(message)
        self.location = location


class RowError(Exception):
    """A row cannot be imported; the message is reported back to the caller."""
