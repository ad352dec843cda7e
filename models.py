# models.py
# -------------------------------------------------------------
# Shared data shapes for the transaction generator and parser:
# input records, configuration snapshot, weekday buckets,
# CLI exit codes and the exception taxonomy.
# -------------------------------------------------------------

from datetime import datetime
from enum import IntEnum
from typing import NamedTuple, Optional

# ---------- Sentinels ----------

INVALID_AMOUNT = -1                 # amount field could not be parsed as an integer
INVALID_TIMESTAMP = datetime.min    # timestamp field could not be parsed

CSV_SEPARATOR = ";"
CSV_HEADER = ["MSISDN", "Amount", "Timestamp"]
TIMESTAMP_FORMAT = "%Y.%m.%d. %H:%M:%S"


class InputRecord(NamedTuple):
    """One data line of an input file: MSISDN;Amount;Timestamp."""
    identifier: Optional[str]
    amount: int
    timestamp: datetime


class ConfigParameters(NamedTuple):
    """Read-only snapshot of app_config.txt for one run."""
    input_folder: str
    error_folder: str
    archive_folder: str
    output_folder: str
    num_of_lines: int


class DayOfWeek(IntEnum):
    """Aggregation buckets; values follow datetime.weekday() (week starts Monday)."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, timestamp: datetime) -> "DayOfWeek":
        return cls(timestamp.weekday())

    @property
    def label(self) -> str:
        return self.name.capitalize()   # MONDAY -> "Monday"


DAY_LABEL_WIDTH = max(len(d.label) for d in DayOfWeek)  # "Wednesday" → 9


class ErrorCode(IntEnum):
    """Exit codes returned by the CLI for argument misuse and config failures."""
    OK = 0
    NON_ZERO = -1           # generate 0
    INVALID_COMMAND = -2    # neither generate nor parse
    TOO_MANY_ARGS = -3
    NO_ARGS = -4
    NOT_A_NUMBER = -5       # generate abc
    NEGATIVE_VALUE = -6     # generate -10
    CONFIG_ERROR = -7


# ---------- Exceptions ----------

class MissingFileError(FileNotFoundError):
    """Input file (or input folder) does not exist."""


class EmptyFolderError(FileNotFoundError):
    """Folder mode found nothing to parse."""


class MalformedLineError(ValueError):
    """Line does not split into exactly three fields; the caller skips it."""

    def __init__(self, file_name: str, line_no: int):
        super().__init__(f"Not enough data columns in file '{file_name}' line {line_no}")
        self.file_name = file_name
        self.line_no = line_no


class ConfigError(Exception):
    """Configuration file is missing or holds an unusable value."""


class ConfigKeyMissingError(ConfigError, LookupError):
    def __init__(self, key: str, path: str):
        super().__init__(f"Key '{key}' not found in the config file: {path}")
        self.key = key
        self.path = path
