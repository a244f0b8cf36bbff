from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Type, Union

import polars as pl


class SchemaValidationError(RuntimeError):
    """Raised when a frame handed to the aggregator breaks its column contract."""


@dataclass(frozen=True)
class ColumnDef:
    name: str
    dtype: Union[Type[pl.DataType], pl.DataType]
    nullable: bool = True
    description: str = ""


@dataclass(frozen=True)
class TableSchema:
    """Defines the shape of a tabular payload exchanged with the aggregator."""

    name: str
    columns: Sequence[ColumnDef]

    def to_polars_schema(self) -> dict[str, pl.DataType]:
        return {col.name: col.dtype for col in self.columns}

    def empty(self) -> pl.DataFrame:
        return pl.DataFrame(schema=self.to_polars_schema())

    def validate(self, df: pl.DataFrame) -> list[str]:
        errors: list[str] = []
        existing = set(df.columns)
        defined = {col.name for col in self.columns}

        missing = defined - existing
        if missing:
            errors.append(
                f"[{self.name}] missing columns: {', '.join(sorted(missing))}"
            )

        for col in self.columns:
            if col.name not in existing:
                continue
            if df.schema[col.name] != col.dtype:
                errors.append(
                    f"[{self.name}] column '{col.name}' is {df.schema[col.name]}, expected {col.dtype}"
                )
            if not col.nullable and df[col.name].null_count() > 0:
                errors.append(f"[{self.name}] column '{col.name}' contains nulls")

        return errors

    def ensure(self, df: pl.DataFrame) -> pl.DataFrame:
        errors = self.validate(df)
        if errors:
            sample = df.head(3).to_dicts()
            raise SchemaValidationError(f"{'; '.join(errors)}; sample={sample}")
        return df


COUNT_RECORDS_SCHEMA = TableSchema(
    name="count_records",
    columns=[
        ColumnDef(
            "campus_identifier",
            pl.Utf8,
            nullable=False,
            description="Source spreadsheet id listed in the level sheet",
        ),
        ColumnDef(
            "count",
            pl.Int64,
            nullable=False,
            description="Total enrolled, sanitized to a non-negative integer",
        ),
        ColumnDef("source_row", pl.Int64, nullable=False),
    ],
)
