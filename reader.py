# reader.py
# -------------------------------------------------------------
# Streaming line reader for MSISDN;Amount;Timestamp files.
# Structural problems (wrong field count) skip the line;
# unparseable amount/timestamp degrade to sentinels.
# -------------------------------------------------------------

import logging
import os
import re
import warnings
from datetime import datetime
from typing import Callable, List, Optional

import pandas as pd

from models import (
    CSV_SEPARATOR,
    INVALID_AMOUNT,
    INVALID_TIMESTAMP,
    TIMESTAMP_FORMAT,
    ConfigParameters,
    InputRecord,
    MalformedLineError,
    MissingFileError,
)

LOGGER = logging.getLogger("txn_pipeline.reader")

ErrorSink = Callable[[str], None]

# field positions inside a split line
MSISDN_POS, AMOUNT_POS, TIMESTAMP_POS = 0, 1, 2
FIELD_COUNT = 3


def error_file_path(file_name: str, config: ConfigParameters) -> str:
    return os.path.join(config.error_folder, os.path.basename(file_name) + ".ERROR.txt")


def append_to_error_file(file_name: str, config: ConfigParameters) -> ErrorSink:
    """
    Build the default sink: every message is appended to <ErrorFolder>/<file>.ERROR.txt.
    """
    def sink(message: str) -> None:
        path = error_file_path(file_name, config)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(message + "\n")
    return sink


AMOUNT_RE = re.compile(r"^[+-]?\d+$", re.ASCII)


def parse_amount(raw: str) -> Optional[int]:
    """Plain base-10 integer only: no underscores, no non-ASCII digits."""
    s = raw.strip()
    if not AMOUNT_RE.match(s):
        return None
    return int(s)


def parse_timestamp(raw: str) -> Optional[datetime]:
    """
    Parse the generator's "yyyy.MM.dd. HH:mm:ss" format first, then anything
    pandas can make sense of. Returns None when nothing works.
    """
    s = raw.strip()
    if not s:
        return None
    try:
        return datetime.strptime(s, TIMESTAMP_FORMAT)
    except ValueError:
        pass
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)  # "could not infer format" on free-form input
        ts = pd.to_datetime(s, errors="coerce")       # bad → NaT
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)                 # aware → naive UTC
    return ts.to_pydatetime()


class LineReader:
    """
    Reads one input file line by line. The header is discarded on construction.

    Usage:
        with LineReader("TestData.csv", config) as reader:
            while reader.has_next():
                try:
                    record = reader.read_next()
                except MalformedLineError:
                    continue
    """

    def __init__(self, file_name: str, config: ConfigParameters, error_sink: Optional[ErrorSink] = None):
        self.file_name = os.path.basename(file_name)
        self.path = os.path.normpath(os.path.join(config.input_folder, file_name))
        self.line_no = 1                 # header is line 1
        self._handle = None
        self._next_line = ""

        if not os.path.isfile(self.path):
            LOGGER.error("File: '%s' does not exist!", self.path)
            raise MissingFileError(self.path)

        self._error_sink = error_sink or append_to_error_file(self.file_name, config)
        # undecodable bytes become U+FFFD, so they surface as per-line rule failures
        self._handle = open(self.path, "r", encoding="utf-8-sig", errors="replace", newline=None)
        try:
            self._handle.readline()      # header row, not data
            self._next_line = self._handle.readline()
        except OSError:
            self.close()
            raise

    def __enter__(self) -> "LineReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def has_next(self) -> bool:
        return self._next_line != ""

    def read_next(self) -> InputRecord:
        """
        Return the next record. Raises MalformedLineError (after reporting to
        the error sink) when the line does not have exactly three fields, and
        EOFError when the file is exhausted.
        """
        if not self.has_next():
            raise EOFError(f"No more lines in {self.file_name}")

        line = self._next_line.rstrip("\r\n")
        self._next_line = self._handle.readline()
        self.line_no += 1

        fields = self._split(line)

        amount = parse_amount(fields[AMOUNT_POS])
        if amount is None:
            amount = INVALID_AMOUNT
            LOGGER.error("Amount in file: '%s' at line: %d is not a number!", self.file_name, self.line_no)

        timestamp = parse_timestamp(fields[TIMESTAMP_POS])
        if timestamp is None:
            timestamp = INVALID_TIMESTAMP
            LOGGER.error("Date in file: '%s' at line: %d is not in a known format!", self.file_name, self.line_no)

        identifier = fields[MSISDN_POS].strip() or None
        return InputRecord(identifier=identifier, amount=amount, timestamp=timestamp)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        self._next_line = ""

    def _split(self, line: str) -> List[str]:
        fields = line.split(CSV_SEPARATOR)
        if len(fields) == FIELD_COUNT:
            return fields

        error = f"Invalid data entry in line: {self.line_no}"
        LOGGER.error("%s (file: '%s')", error, self.file_name)
        self._error_sink(error)
        raise MalformedLineError(self.file_name, self.line_no)
