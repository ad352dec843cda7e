import os                   # stdlib: filesystem and path utilities
import sys                  # stdlib: command-line arguments (sys.argv)
import time                 # stdlib: elapsed-time measurement
import logging              # stdlib: structured logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Dict

from aggregate import DayOfWeekAggregator
from config_reader import DEFAULT_CONFIG_PATH, read_config
from file_manager import ARCHIVE, ERROR, route_file
from generator import generate_csv
from models import (
    ConfigError,
    ConfigParameters,
    EmptyFolderError,
    ErrorCode,
    MalformedLineError,
    MissingFileError,
)
from reader import LineReader
from validators import validate_record

# ╔══════════════════════════════════════════════════════════════════════╗
# ║ LOGGING                                                              ║
# ╚══════════════════════════════════════════════════════════════════════╝

logger_path = "logger/logger.log"   # log file location under logger/

# Package logger; modules log through children ("txn_pipeline.reader", ...)
LOGGER = logging.getLogger("txn_pipeline")


def configure_logging(level: int = logging.INFO, log_path: Optional[str] = logger_path) -> logging.Logger:
    """
    Attach a file handler and a console handler to the package logger.
    Called by the CLI entry points; repeated calls do not add handlers twice.
    """
    LOGGER.setLevel(level)
    if not LOGGER.handlers:  # avoid duplicate logs when re-imported in REPL/IDE
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")

        if log_path:
            os.makedirs(os.path.dirname(log_path) or ".", exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            LOGGER.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        LOGGER.addHandler(console_handler)
    return LOGGER

# ╔══════════════════════════════════════════════════════════════════════╗
# ║ PER-FILE CONTEXT & RUN SUMMARY                                       ║
# ╚══════════════════════════════════════════════════════════════════════╝

@dataclass
class FileResult:
    """Outcome of one file's pass: its error log, aggregate and destination."""
    file_name: str
    errors: List[str] = field(default_factory=list)        # ErrorLog entries, line order
    aggregator: DayOfWeekAggregator = field(default_factory=DayOfWeekAggregator)
    lines: int = 0
    invalid_lines: int = 0
    malformed_lines: int = 0
    elapsed_ms: int = 0
    destination: Optional[str] = None                       # ARCHIVE | ERROR


@dataclass
class ParseSummary:
    results: List[FileResult] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)      # missing file, empty folder
    elapsed_ms: int = 0

    @property
    def archived(self) -> int:
        return sum(1 for r in self.results if r.destination == ARCHIVE)

    @property
    def errored(self) -> int:
        return sum(1 for r in self.results if r.destination == ERROR)

    @property
    def error_log(self) -> Dict[str, List[str]]:
        """file name → error messages, for files that had any."""
        return {r.file_name: list(r.errors) for r in self.results if r.errors}

# ╔══════════════════════════════════════════════════════════════════════╗
# ║ PARSING                                                              ║
# ╚══════════════════════════════════════════════════════════════════════╝

def parse_file(file_name: str, config: ConfigParameters, now: Optional[datetime] = None) -> FileResult:
    """
    One streaming pass over <InputFolder>/<file_name>:
      read → validate → accumulate valid records → route to archive/error folder.
    Raises MissingFileError if the file does not exist or is not directly
    inside the input folder (routing moves files by name).
    """
    if os.path.basename(file_name) != file_name:
        LOGGER.error("File name: '%s' must not contain a directory part!", file_name)
        raise MissingFileError(file_name)

    result = FileResult(file_name=os.path.basename(file_name))
    started = time.perf_counter()

    LOGGER.info("Parsing file: %s", result.file_name)
    # Structural errors go into the same error log as rule failures, in line order
    with LineReader(file_name, config, error_sink=result.errors.append) as reader:
        while reader.has_next():
            try:
                record = reader.read_next()
            except MalformedLineError:
                result.lines += 1
                result.malformed_lines += 1
                continue                              # skip the line, keep reading

            result.lines += 1
            ok, messages = validate_record(record, reader.line_no, result.file_name, now)
            if ok:
                result.aggregator.accumulate(record)
            else:
                result.invalid_lines += 1
                result.errors.extend(messages)

    result.elapsed_ms = int((time.perf_counter() - started) * 1000)
    LOGGER.info(
        "Finished parsing file: '%s' with: %d errors in %d milliseconds.",
        result.file_name, len(result.errors), result.elapsed_ms,
    )

    result.destination = route_file(
        result.file_name, result.errors, result.aggregator, result.elapsed_ms, config,
    )
    return result


def list_input_files(input_folder: str) -> List[str]:
    """
    Regular files in the input folder, sorted by name
    (generated names carry a timestamp, so this is chronological).
    """
    if not os.path.isdir(input_folder):
        LOGGER.error("Input folder: '%s' does not exist!", input_folder)
        raise MissingFileError(input_folder)

    names = [n for n in os.listdir(input_folder) if os.path.isfile(os.path.join(input_folder, n))]
    if not names:
        LOGGER.error("No files in: '%s' directory.", input_folder)
        raise EmptyFolderError(input_folder)
    return sorted(names)


def parse_folder(config: ConfigParameters, now: Optional[datetime] = None,
                 failures: Optional[List[str]] = None) -> List[FileResult]:
    """
    Parse every file in the input folder. A file that cannot be read or moved
    is logged (and added to `failures` when given); the next file is still parsed.
    """
    LOGGER.info("Parsing whole InputFolder.")
    results: List[FileResult] = []
    for name in list_input_files(config.input_folder):
        try:
            results.append(parse_file(name, config, now))
        except (OSError, UnicodeError) as e:
            LOGGER.error("Failed to process file: '%s' (%s). Continuing with the next file.", name, e)
            if failures is not None:
                failures.append(f"{name}: {e}")
    return results


def run_parse(config: ConfigParameters, file_name: Optional[str] = None,
              now: Optional[datetime] = None) -> ParseSummary:
    """
    Parse one file (file_name given) or the whole input folder.
    Missing files and empty folders are logged, not raised; the summary is
    always logged at the end.
    """
    summary = ParseSummary()
    started = time.perf_counter()

    try:
        if file_name:
            LOGGER.info("Parsing only %s file.", file_name)
            summary.results.append(parse_file(file_name, config, now))
        else:
            summary.results.extend(parse_folder(config, now, summary.failures))
    except (OSError, UnicodeError) as e:           # MissingFileError, EmptyFolderError, I/O
        summary.failures.append(str(e))

    summary.elapsed_ms = int((time.perf_counter() - started) * 1000)
    LOGGER.info(
        "Parsed %d file(s) — archived=%d, errored=%d, lines=%d, invalid=%d, malformed=%d, failures=%d in %d milliseconds.",
        len(summary.results), summary.archived, summary.errored,
        sum(r.lines for r in summary.results),
        sum(r.invalid_lines for r in summary.results),
        sum(r.malformed_lines for r in summary.results),
        len(summary.failures), summary.elapsed_ms,
    )
    return summary

# ╔══════════════════════════════════════════════════════════════════════╗
# ║ CLI ENTRY POINT                                                      ║
# ╚══════════════════════════════════════════════════════════════════════╝

CMD_GENERATE = "generate"
CMD_PARSE = "parse"


def build_arg_parser():
    import argparse  # stdlib: easy command-line parsing

    parser = argparse.ArgumentParser(
        prog="txn-pipeline",
        description="Generate or parse MSISDN;Amount;Timestamp test files.",
    )
    parser.add_argument("command", nargs="?", default=None, help="generate | parse")
    parser.add_argument("value", nargs="?", default=None,
                        help="generate: number of lines (non-zero); parse: file name (omit for whole InputFolder)")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to the Key: value config file.")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def parse_line_count(value: str):
    """
    Returns (num_of_lines, ErrorCode.OK) or (None, <error code>) for the generate argument.
    """
    try:
        n = int(value)
    except ValueError:
        LOGGER.error("Second argument needs to be of type int.")
        return None, ErrorCode.NOT_A_NUMBER
    if n == 0:
        LOGGER.error("Second argument must be non-zero.")
        return None, ErrorCode.NON_ZERO
    if n < 0:
        LOGGER.error("Second argument must be a positive number.")
        return None, ErrorCode.NEGATIVE_VALUE
    return n, ErrorCode.OK


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_arg_parser()
    args, extra = parser.parse_known_args(argv)

    configure_logging(getattr(logging, args.log_level))
    LOGGER.info("Starting execution.")

    # No positional args at all: nothing to do
    if args.command is None:
        LOGGER.error("No arguments provided! - Specify at least one argument: <<generate>> or <<parse>>")
        return ErrorCode.NO_ARGS
    if extra:
        LOGGER.error("Provided %d args, expected at most 2!", 2 + len(extra))
        return ErrorCode.TOO_MANY_ARGS

    command = args.command.lower()
    if command not in (CMD_GENERATE, CMD_PARSE):
        LOGGER.error("Unknown command '%s'. Expected <<generate>> or <<parse>>.", args.command)
        return ErrorCode.INVALID_COMMAND

    num_of_lines = None
    if command == CMD_GENERATE and args.value is not None:
        num_of_lines, code = parse_line_count(args.value)
        if code != ErrorCode.OK:
            return code

    try:
        config = read_config(args.config)
    except ConfigError as e:
        LOGGER.error("Cannot read configuration: %s", e)
        return ErrorCode.CONFIG_ERROR

    if command == CMD_GENERATE:
        generate_csv(config, num_of_lines)
    else:
        run_parse(config, args.value)

    LOGGER.info("Done with executing.")
    return ErrorCode.OK


if __name__ == "__main__":
    sys.exit(int(main()))
