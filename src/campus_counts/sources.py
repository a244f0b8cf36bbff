"""Source readers that turn a level's tracking sheet into count records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import polars as pl
from openpyxl.workbook.workbook import Workbook

from .levels import Level
from .notify import BaseNotifier, ConsoleNotifier
from .schema import COUNT_RECORDS_SCHEMA

ID_COLUMN = 1
COUNT_COLUMN = 4
FIRST_DATA_ROW = 2


@dataclass(frozen=True)
class CountRecord:
    """One `(identifier, count)` observation; `source_name` is set once resolved."""

    campus_identifier: str
    count: int
    source_name: str | None = None

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"Negative count {self.count} for {self.campus_identifier}")


class BaseSourceReader(ABC):
    """Contract the aggregator needs from whatever holds the per-level counts."""

    @abstractmethod
    def read(self, level: Level) -> list[CountRecord]:
        """Return the level's records, or `[]` when its source is absent or empty."""


MAX_COUNT = 2.0**63


def _clean_raw(expr: pl.Expr) -> pl.Expr:
    return expr.cast(pl.Utf8).str.strip_chars().str.replace_all(",", "")


def parse_count(expr: pl.Expr) -> pl.Expr:
    """Parse a raw count column into a non-negative Int64.

    Digit-only strings are cast straight to `Int64`; anything else goes through
    `Float64` and must be finite, whole, non-negative and within `Int64` range.

    Args:
        expr (pl.Expr): Raw count cells, as text.

    Returns:
        pl.Expr: `Int64` counts, `null` where the value cannot be used.
    """
    raw = _clean_raw(expr)
    value = raw.cast(pl.Float64, strict=False)
    usable_float = (
        value.is_not_null()
        & value.is_finite()
        & (value >= 0)
        & (value < MAX_COUNT)
        & (value == value.floor())
    ).fill_null(False)
    return (
        pl.when(raw.str.contains(r"^\d+$").fill_null(False))
        .then(raw.cast(pl.Int64, strict=False))
        .when(usable_float)
        .then(value.cast(pl.Int64, strict=False))
        .otherwise(pl.lit(None, dtype=pl.Int64))
    )


def sanitize_count(expr: pl.Expr) -> pl.Expr:
    """Parse a raw count column into a non-negative Int64, using 0 for anything else."""
    return parse_count(expr).fill_null(pl.lit(0, dtype=pl.Int64))


def invalid_count(expr: pl.Expr) -> pl.Expr:
    """True where a non-empty raw count cannot be used as an enrollment total."""
    raw = _clean_raw(expr)
    present = raw.is_not_null() & (raw != "")
    return (present & parse_count(expr).is_null()).fill_null(False)


def _cell_text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


class WorkbookSourceReader(BaseSourceReader):
    """Read the ES/MS/HS sheets produced by the spreadsheet-id scan.

    Each sheet has a header row (`Spreadsheet ID | Campus | Error Log | Count`)
    followed by one row per source spreadsheet. Only the id and count columns
    are consumed here.
    """

    def __init__(self, workbook: Workbook, notifier: BaseNotifier | None = None):
        self.workbook = workbook
        self.notifier = notifier or ConsoleNotifier()

    def read_frame(self, level: Level) -> pl.DataFrame:
        sheet_name = level.sheet_name
        if sheet_name not in self.workbook.sheetnames:
            self.notifier.warning(f"{sheet_name} sheet not found, skipping")
            return COUNT_RECORDS_SCHEMA.empty()

        ws = self.workbook[sheet_name]
        if ws.max_row < FIRST_DATA_ROW:
            self.notifier.warning(f"No data rows found in {sheet_name} sheet")
            return COUNT_RECORDS_SCHEMA.empty()

        rows = []
        for offset, row in enumerate(
            ws.iter_rows(
                min_row=FIRST_DATA_ROW,
                max_row=ws.max_row,
                max_col=COUNT_COLUMN,
                values_only=True,
            )
        ):
            rows.append(
                {
                    "campus_identifier": _cell_text(row[ID_COLUMN - 1]),
                    "raw_count": _cell_text(row[COUNT_COLUMN - 1]),
                    "source_row": FIRST_DATA_ROW + offset,
                }
            )

        df = pl.DataFrame(
            rows,
            schema={
                "campus_identifier": pl.Utf8,
                "raw_count": pl.Utf8,
                "source_row": pl.Int64,
            },
        )
        df = df.with_columns(
            campus_identifier=pl.col("campus_identifier").str.strip_chars()
        ).filter(
            pl.col("campus_identifier").is_not_null()
            & (pl.col("campus_identifier") != "")
        )

        self._log_invalid_counts(df, sheet_name)
        df = df.with_columns(count=sanitize_count(pl.col("raw_count"))).select(
            ["campus_identifier", "count", "source_row"]
        )
        return COUNT_RECORDS_SCHEMA.ensure(df)

    def read(self, level: Level) -> list[CountRecord]:
        df = self.read_frame(level)
        return [
            CountRecord(campus_identifier=row["campus_identifier"], count=row["count"])
            for row in df.iter_rows(named=True)
        ]

    def _log_invalid_counts(self, df: pl.DataFrame, sheet_name: str) -> None:
        invalid = df.filter(invalid_count(pl.col("raw_count")))
        for row in invalid.iter_rows(named=True):
            self.notifier.warning(
                f"Invalid count value {row['raw_count']!r} in {sheet_name} "
                f"row {row['source_row']}, defaulting to 0"
            )
