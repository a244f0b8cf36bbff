from dataclasses import dataclass
from pathlib import Path

import yaml
from environs import Env, EnvError
from rich.console import Console

env = Env()
env.read_env()

console = Console()

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CAMPUS_MAP_FILE = PROJECT_ROOT / "data" / "campuses.yml"
DEFAULT_DESTINATION_SHEET = "ALE Counts"


@dataclass(frozen=True)
class Settings:
    """Locations of the workbook and campus configuration used by a run."""

    workbook_file: Path
    campus_map_file: Path
    destination_sheet: str = DEFAULT_DESTINATION_SHEET


def resolve_campus_map_file() -> Path:
    try:
        return env.path("CAMPUS_MAP_FILE")
    except EnvError:
        return DEFAULT_CAMPUS_MAP_FILE


def load_settings() -> Settings:
    """Resolve settings from the environment (and `.env`, if present).

    Raises:
        FileNotFoundError: `COUNTS_WORKBOOK` is unset or points nowhere.
    """
    try:
        workbook_file = env.path("COUNTS_WORKBOOK")
    except EnvError as exc:
        raise FileNotFoundError("COUNTS_WORKBOOK is not configured.") from exc
    if not workbook_file.exists():
        raise FileNotFoundError(f"Counts workbook {workbook_file=} does not exist.")

    return Settings(
        workbook_file=workbook_file,
        campus_map_file=resolve_campus_map_file(),
        destination_sheet=env.str("DESTINATION_SHEET", DEFAULT_DESTINATION_SHEET),
    )


def load_yaml(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
