"""Consolidate per-level campus counts into the reporting sheet."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .identity import CampusIdentityMap
from .index import DestinationIndex
from .levels import Level, levels_for, ranges_for
from .notify import BaseNotifier, ConsoleNotifier
from .sources import BaseSourceReader, CountRecord
from .store import BaseDestinationStore, DestinationMissing


@dataclass
class AggregationResult:
    level: Level | None
    updated_count: int
    missing_campuses: list[str] = field(default_factory=list)
    summary: str = ""


def format_summary(
    level: Level | None, updated_count: int, missing_campuses: list[str]
) -> str:
    """Build the single user-facing message reported after a run."""
    owner = f"{level.value}'s" if level else "All levels'"
    text = f"{updated_count} {owner} Total Enrolled values in the ALE Counts sheet were updated."
    if missing_campuses:
        text += (
            f"\n\nCampuses with missing counts ({len(missing_campuses)}):\n"
            f"{', '.join(missing_campuses)}\n\n"
            "A value of 0 was added for those campuses."
        )
    return text


class Aggregator:
    """Sum source counts per destination row and write one batch per row range.

    Every per-record problem (unknown spreadsheet id, campus absent from the
    report, empty source sheet) is reported as a warning and skipped; only a
    missing destination sheet aborts the run.
    """

    def __init__(
        self,
        store: BaseDestinationStore,
        reader: BaseSourceReader,
        identities: CampusIdentityMap,
        notifier: BaseNotifier | None = None,
    ):
        self.store = store
        self.reader = reader
        self.identities = identities
        self.notifier = notifier or ConsoleNotifier()

    def resolve(self, level: Level, records: list[CountRecord]) -> list[CountRecord]:
        """Attach canonical campus names, dropping records with unknown identifiers."""
        resolved: list[CountRecord] = []
        for record in records:
            name = self.identities.resolve(level, record.campus_identifier)
            if name is None:
                self.notifier.warning(
                    f"No campus mapping found for spreadsheet ID "
                    f"{record.campus_identifier} in {level.value}"
                )
                continue
            resolved.append(replace(record, source_name=name))
        return resolved

    def accumulate(
        self, index: DestinationIndex, level: Level, records: list[CountRecord]
    ) -> None:
        for record in records:
            entry = index.lookup(record.source_name)
            if entry is None:
                self.notifier.warning(
                    f'Campus "{record.source_name}" from {level.value} sheet '
                    f"not found in {self.store.sheet_name}"
                )
                continue
            entry.add(record.count)

    def missing_campuses(self, index: DestinationIndex, level: Level) -> list[str]:
        missing: list[str] = []
        for name in self.identities.names(level):
            entry = index.lookup(name)
            if entry is not None and not entry.matched_any_source:
                missing.append(name)
        return missing

    def aggregate(self, level: Level | str | None = None) -> AggregationResult:
        """Aggregate source counts into the destination sheet.

        Args:
            level (Level | str | None, optional): Level to aggregate. When omitted
                every level is read and the full row span is rewritten.

        Returns:
            AggregationResult: Rows updated with a positive total, the campuses
                of a requested level that received no count, and the summary text.

        Raises:
            DestinationMissing: The destination sheet does not exist; nothing is
                read or written.
        """
        level = Level.parse(level)

        if not self.store.exists():
            error = DestinationMissing(self.store.sheet_name)
            self.notifier.error(str(error))
            raise error

        index = DestinationIndex.build(
            self.store, ranges_for(level), notifier=self.notifier
        )

        for current in levels_for(level):
            records = self.resolve(current, self.reader.read(current))
            self.accumulate(index, current, records)

        missing = self.missing_campuses(index, level) if level else []

        for snapshot in index.snapshots:
            self.store.write_counts(snapshot.row_range, index.counts_for(snapshot))

        updated = index.updated_count()
        if updated == 0:
            self.notifier.warning("No campus received a positive count")

        summary = format_summary(level, updated, missing)
        self.notifier.summary(summary)
        return AggregationResult(
            level=level,
            updated_count=updated,
            missing_campuses=missing,
            summary=summary,
        )
