from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from openpyxl.workbook.workbook import Workbook

from .common import DEFAULT_DESTINATION_SHEET
from .levels import RowRange

LABEL_COLUMN = 4  # D
COUNT_COLUMN = 5  # E


class AggregationError(RuntimeError):
    """Base class for conditions that stop an aggregation run."""


class DestinationMissing(AggregationError):
    """Raised when the reporting sheet cannot be found; nothing is written."""

    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f"Error: {sheet_name} sheet not found")


class BaseDestinationStore(ABC):
    """Reads campus labels from, and writes totals to, the reporting sheet."""

    sheet_name: str

    @abstractmethod
    def exists(self) -> bool: ...

    @abstractmethod
    def read_labels(self, row_range: RowRange) -> list[tuple[int, str | None]]:
        """Return `(row_number, label)` for every row of `row_range`."""

    @abstractmethod
    def write_counts(self, row_range: RowRange, counts: Sequence[int]) -> None:
        """Write one count per row of `row_range` in a single batch."""


class WorkbookDestinationStore(BaseDestinationStore):
    """Destination backed by an openpyxl worksheet: labels in D, totals in E."""

    def __init__(
        self,
        workbook: Workbook,
        sheet_name: str = DEFAULT_DESTINATION_SHEET,
        label_column: int = LABEL_COLUMN,
        count_column: int = COUNT_COLUMN,
    ):
        self.workbook = workbook
        self.sheet_name = sheet_name
        self.label_column = label_column
        self.count_column = count_column

    def exists(self) -> bool:
        return self.sheet_name in self.workbook.sheetnames

    def _sheet(self):
        if not self.exists():
            raise DestinationMissing(self.sheet_name)
        return self.workbook[self.sheet_name]

    def read_labels(self, row_range: RowRange) -> list[tuple[int, str | None]]:
        ws = self._sheet()
        cells = ws.iter_rows(
            min_row=row_range.start,
            max_row=row_range.end,
            min_col=self.label_column,
            max_col=self.label_column,
            values_only=True,
        )
        labels: list[tuple[int, str | None]] = []
        for row_number, (value,) in zip(row_range, cells):
            labels.append((row_number, None if value is None else str(value)))
        return labels

    def write_counts(self, row_range: RowRange, counts: Sequence[int]) -> None:
        if len(counts) != len(row_range):
            raise ValueError(
                f"Expected {len(row_range)} counts for rows {row_range}, got {len(counts)}"
            )
        ws = self._sheet()
        for row_number, count in zip(row_range, counts):
            ws.cell(row=row_number, column=self.count_column, value=count)
