import pytest

from campus_counts.levels import (
    FULL_RANGE,
    ROW_RANGES,
    Level,
    RowRange,
    levels_for,
    ranges_for,
)


class TestRowRanges:
    def test_boundaries(self):
        assert ROW_RANGES[Level.ES] == (RowRange(4, 113),)
        assert ROW_RANGES[Level.MS] == (RowRange(116, 160), RowRange(208, 209))
        assert ROW_RANGES[Level.HS] == (RowRange(163, 206), RowRange(210, 212))
        assert FULL_RANGE == RowRange(4, 212)

    def test_sizes(self):
        assert [len(r) for r in ROW_RANGES[Level.ES]] == [110]
        assert [len(r) for r in ROW_RANGES[Level.MS]] == [45, 2]
        assert [len(r) for r in ROW_RANGES[Level.HS]] == [44, 3]

    def test_level_blocks_do_not_overlap_and_fit_full_range(self):
        rows: list[int] = []
        for blocks in ROW_RANGES.values():
            for block in blocks:
                assert block.start in FULL_RANGE
                assert block.end in FULL_RANGE
                rows.extend(block)
        assert len(rows) == len(set(rows))

    def test_ranges_for(self):
        assert ranges_for(None) == (FULL_RANGE,)
        assert ranges_for(Level.MS) == ROW_RANGES[Level.MS]

    def test_levels_for(self):
        assert levels_for(None) == (Level.ES, Level.MS, Level.HS)
        assert levels_for(Level.HS) == (Level.HS,)

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            RowRange(10, 9)
        with pytest.raises(ValueError):
            RowRange(0, 3)


class TestLevel:
    def test_parse(self):
        assert Level.parse("es") == Level.ES
        assert Level.parse(" MS ") == Level.MS
        assert Level.parse(Level.HS) == Level.HS
        assert Level.parse(None) is None
        assert Level.parse("") is None

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Level.parse("PK")
        with pytest.raises(ValueError):
            Level.parse(1)  # type: ignore[arg-type]

    def test_labels_and_sheets(self):
        assert Level.ES.label == "Elementary School"
        assert Level.HS.sheet_name == "HS"
