from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class Level(str, Enum):
    """Schooling tier that partitions both the source sheets and the report."""

    ES = "ES"
    MS = "MS"
    HS = "HS"

    @property
    def label(self) -> str:
        return _LEVEL_LABELS[self]

    @property
    def sheet_name(self) -> str:
        """Name of the source sheet holding this level's spreadsheet ids and counts."""
        return self.value

    @classmethod
    def parse(cls, value: str | Level | None) -> Level | None:
        if value is None or isinstance(value, Level):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown level {value!r}; expected ES, MS or HS")
        text = value.strip().upper()
        if not text:
            return None
        try:
            return cls(text)
        except ValueError as exc:
            raise ValueError(f"Unknown level {value!r}; expected ES, MS or HS") from exc


_LEVEL_LABELS = {
    Level.ES: "Elementary School",
    Level.MS: "Middle School",
    Level.HS: "High School",
}


@dataclass(frozen=True)
class RowRange:
    """Inclusive block of destination rows."""

    start: int
    end: int

    def __post_init__(self):
        if self.start < 1 or self.end < self.start:
            raise ValueError(f"Invalid row range {self.start}-{self.end}")

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def __contains__(self, row: object) -> bool:
        return isinstance(row, int) and self.start <= row <= self.end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


# Rows of the "ALE Counts" sheet owned by each level. MS and HS each carry a
# trailing special programs block below the HS primary block.
ROW_RANGES: dict[Level, tuple[RowRange, ...]] = {
    Level.ES: (RowRange(4, 113),),
    Level.MS: (RowRange(116, 160), RowRange(208, 209)),
    Level.HS: (RowRange(163, 206), RowRange(210, 212)),
}

FULL_RANGE = RowRange(4, 212)


def ranges_for(level: Level | None) -> tuple[RowRange, ...]:
    """Return the destination blocks to process for `level`, or the full span when
    no level is given."""
    if level is None:
        return (FULL_RANGE,)
    return ROW_RANGES[level]


def levels_for(level: Level | None) -> tuple[Level, ...]:
    if level is None:
        return tuple(Level)
    return (level,)
