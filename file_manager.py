# file_manager.py
# -------------------------------------------------------------
# Finalizes a parsed file: REPORT.txt + archive on success,
# ERROR.txt + error folder when any line was invalid.
# Moves never overwrite an existing destination.
# -------------------------------------------------------------

import logging
import os
import shutil
from datetime import datetime
from typing import List

from aggregate import DayOfWeekAggregator
from models import DAY_LABEL_WIDTH, ConfigParameters

LOGGER = logging.getLogger("txn_pipeline.file_manager")

REPORT_SUFFIX = ".REPORT.txt"
ERROR_SUFFIX = ".ERROR.txt"
SEPARATOR = "-" * 32

ARCHIVE = "archive"
ERROR = "error"


def format_cents(cents: int) -> str:
    """12345 -> "123.45" (exact, no float rounding)."""
    sign = "-" if cents < 0 else ""
    cents = abs(cents)
    return f"{sign}{cents // 100}.{cents % 100:02d}"


def write_report(file_name: str, aggregator: DayOfWeekAggregator, elapsed_ms: int,
                 config: ConfigParameters) -> str:
    """
    Write <OutputFolder>/<file>.REPORT.txt:
        Monday   : 123.45 EUR
        ...
        --------------------------------
        Processing time: 12 milliseconds
    """
    os.makedirs(config.output_folder, exist_ok=True)
    path = os.path.join(config.output_folder, file_name + REPORT_SUFFIX)

    with open(path, "w", encoding="utf-8") as f:
        for day, cents in aggregator.to_series().items():
            f.write(f"{day.ljust(DAY_LABEL_WIDTH)}: {format_cents(int(cents))} EUR\n")
        f.write(SEPARATOR + "\n")
        f.write(f"Processing time: {elapsed_ms} milliseconds\n")
    return path


def write_errors(file_name: str, errors: List[str], config: ConfigParameters) -> str:
    """
    Append the file's error messages to <ErrorFolder>/<file>.ERROR.txt
    (created if absent), followed by the logging time and a blank line.
    """
    os.makedirs(config.error_folder, exist_ok=True)
    path = os.path.join(config.error_folder, file_name + ERROR_SUFFIX)

    with open(path, "a", encoding="utf-8") as f:
        for error in errors:
            f.write(error + "\n")
        f.write(f"Logging time: {datetime.now():%Y-%m-%d %H:%M:%S}\n")
        f.write("\n")
    return path


def move_file(file_name: str, source_folder: str, destination_folder: str) -> bool:
    """
    Move <source>/<file> into <destination>/<file>.
    Returns False (and logs a warning) when the destination already exists.
    """
    source = os.path.join(source_folder, file_name)
    destination = os.path.join(destination_folder, file_name)

    if os.path.exists(destination):
        LOGGER.warning("File '%s' already exists in '%s'; leaving '%s' in place.",
                       file_name, destination_folder, source)
        return False

    os.makedirs(destination_folder, exist_ok=True)
    shutil.move(source, destination)
    return True


def route_file(file_name: str, errors: List[str], aggregator: DayOfWeekAggregator,
               elapsed_ms: int, config: ConfigParameters) -> str:
    """
    Send a fully parsed file to exactly one destination.
    Returns ARCHIVE or ERROR.
    """
    if not errors:
        LOGGER.debug("Writing aggregate results to file %s%s", file_name, REPORT_SUFFIX)
        write_report(file_name, aggregator, elapsed_ms, config)
        LOGGER.info("Moving %s into: '%s'.", file_name, config.archive_folder)
        move_file(file_name, config.input_folder, config.archive_folder)
        return ARCHIVE

    LOGGER.debug("Writing error logs to file %s%s", file_name, ERROR_SUFFIX)
    write_errors(file_name, errors, config)
    LOGGER.info("Moving %s into: '%s'.", file_name, config.error_folder)
    move_file(file_name, config.input_folder, config.error_folder)
    return ERROR
