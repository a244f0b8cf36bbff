import os
import tempfile
from pathlib import Path

import pytest
import yaml
from openpyxl import Workbook

from campus_counts.identity import CampusIdentityMap
from campus_counts.notify import RecordingNotifier

BERNAL_ID = "1bernal-one"
HOLMGREEN_ES_ID = "1holmgreen-es"
HOLMGREEN_MS_ID = "1holmgreen-ms"
CLARK_ID = "1clark-hs"

CAMPUS_MAP = {
    "ES": {
        "Bernal #1": BERNAL_ID,
        "Holmgreen": HOLMGREEN_ES_ID,
        "Brandeis AU": "",
    },
    "MS": {
        "Holmgreen": HOLMGREEN_MS_ID,
        "Connally AU #1": "1connally-ms",
    },
    "HS": {
        "Clark ( 3 Periods )": CLARK_ID,
    },
}

SOURCE_HEADER = ["Spreadsheet ID", "Campus", "Error Log", "Count"]


def add_source_sheet(workbook: Workbook, name: str, rows: list[list[object]]):
    ws = workbook.create_sheet(name)
    ws.append(SOURCE_HEADER)
    for row in rows:
        ws.append(row)
    return ws


def add_destination_sheet(
    workbook: Workbook, labels: dict[int, object], name: str = "ALE Counts"
):
    ws = workbook.create_sheet(name)
    ws["D1"] = "Campus"
    ws["E1"] = "Total Enrolled"
    for row_number, label in labels.items():
        ws.cell(row=row_number, column=4, value=label)
    return ws


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def identities():
    return CampusIdentityMap.from_mapping(CAMPUS_MAP)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def workbook():
    """Workbook laid out like the tracking spreadsheet: report plus ES/MS sheets."""
    wb = Workbook()
    wb.remove(wb.active)
    add_destination_sheet(
        wb, {4: "Bernal #1", 5: "Holmgreen", 6: None, 116: "Holmgreen"}
    )
    add_source_sheet(
        wb,
        "ES",
        [
            [BERNAL_ID, "Bernal 1 - Tracey Sorrell", None, 17],
            [HOLMGREEN_ES_ID, "Holmgreen - Michael Cline", None, 4],
        ],
    )
    add_source_sheet(
        wb,
        "MS",
        [[HOLMGREEN_MS_ID, "Holmgreen (MS) - Ana Ruiz", None, 9]],
    )
    return wb


@pytest.fixture
def sample_campus_yml(temp_dir):
    """Create a sample campuses.yml file."""
    file_path = temp_dir / "campuses.yml"
    with open(file_path, "w") as f:
        yaml.dump(CAMPUS_MAP, f, sort_keys=False)
    return file_path


@pytest.fixture
def sample_workbook_xlsx(temp_dir, workbook):
    file_path = temp_dir / "class-counts.xlsx"
    workbook.save(file_path)
    return file_path


@pytest.fixture
def test_env(temp_dir, sample_campus_yml, sample_workbook_xlsx):
    """Set up test environment variables."""
    os.environ["COUNTS_WORKBOOK"] = str(sample_workbook_xlsx)
    os.environ["CAMPUS_MAP_FILE"] = str(sample_campus_yml)
    os.environ["DESTINATION_SHEET"] = "ALE Counts"

    yield temp_dir

    for key in ("COUNTS_WORKBOOK", "CAMPUS_MAP_FILE", "DESTINATION_SHEET"):
        os.environ.pop(key, None)
