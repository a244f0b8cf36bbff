__version__ = "0.0.1"
from .aggregator import AggregationResult, Aggregator, format_summary
from .common import Settings, console, env, load_settings
from .identity import CampusIdentityMap, IdentityMapError, LevelIdentities
from .index import DestinationIndex, DestinationRow
from .levels import FULL_RANGE, ROW_RANGES, Level, RowRange, ranges_for
from .normalize import normalize_campus_name
from .notify import BaseNotifier, ConsoleNotifier, RecordingNotifier
from .schema import COUNT_RECORDS_SCHEMA, SchemaValidationError
from .sources import BaseSourceReader, CountRecord, WorkbookSourceReader
from .store import (
    AggregationError,
    BaseDestinationStore,
    DestinationMissing,
    WorkbookDestinationStore,
)
