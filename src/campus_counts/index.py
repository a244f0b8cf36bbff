from __future__ import annotations

from dataclasses import dataclass

from .levels import RowRange
from .normalize import normalize_campus_name
from .notify import BaseNotifier
from .store import BaseDestinationStore


@dataclass
class DestinationRow:
    """A report row and the total accumulated for it during one run."""

    row_number: int
    campus_label: str
    accumulated_count: int = 0
    matched_any_source: bool = False

    def add(self, count: int) -> None:
        self.accumulated_count += count
        self.matched_any_source = True


@dataclass
class RangeSnapshot:
    row_range: RowRange
    labels: list[str | None]


class DestinationIndex:
    """Lookup from displayed campus label to its destination row.

    Labels are matched exactly after trimming; the normalized form of each label
    is kept as a fallback key for names that differ only in formatting.
    """

    def __init__(self, notifier: BaseNotifier | None = None):
        self.notifier = notifier
        self.snapshots: list[RangeSnapshot] = []
        self.by_label: dict[str, DestinationRow] = {}
        self.by_key: dict[str, DestinationRow] = {}

    @classmethod
    def build(
        cls,
        store: BaseDestinationStore,
        ranges: tuple[RowRange, ...],
        notifier: BaseNotifier | None = None,
    ) -> DestinationIndex:
        index = cls(notifier=notifier)
        for row_range in ranges:
            index.add_range(row_range, store.read_labels(row_range))
        return index

    def add_range(
        self, row_range: RowRange, labels: list[tuple[int, str | None]]
    ) -> None:
        cleaned: list[str | None] = []
        for row_number, label in labels:
            text = label.strip() if label else ""
            if not text:
                cleaned.append(None)
                continue
            cleaned.append(text)
            entry = DestinationRow(row_number=row_number, campus_label=text)
            previous = self.by_label.get(text)
            if previous is not None and self.notifier:
                self.notifier.warning(
                    f'Duplicate campus "{text}" in rows {previous.row_number} '
                    f"and {row_number}; both rows will share one total"
                )
            self.by_label[text] = entry
            key = normalize_campus_name(text)
            if key:
                self.by_key[key] = entry
        self.snapshots.append(RangeSnapshot(row_range=row_range, labels=cleaned))

    def lookup(self, name: str | None) -> DestinationRow | None:
        """Find the destination row for a canonical campus name.

        Args:
            name (str | None): Campus name as configured in the identity map.

        Returns:
            DestinationRow | None: The row whose trimmed label equals `name`, else
                the row sharing its normalized key, else None.
        """
        if not name:
            return None
        text = name.strip()
        entry = self.by_label.get(text)
        if entry is not None:
            return entry
        return self.by_key.get(normalize_campus_name(text))

    def entries(self) -> list[DestinationRow]:
        return list(self.by_label.values())

    def counts_for(self, snapshot: RangeSnapshot) -> list[int]:
        counts: list[int] = []
        for label in snapshot.labels:
            entry = self.by_label.get(label) if label else None
            counts.append(entry.accumulated_count if entry else 0)
        return counts

    def updated_count(self) -> int:
        return sum(1 for entry in self.entries() if entry.accumulated_count > 0)
