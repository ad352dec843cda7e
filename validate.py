#!/usr/bin/env python3
# validate.py
# -------------------------------------------------------------
# Command-line dry run for one input file.
# Reads and validates every line with the same reader and rules
# as the parse pipeline, but writes nothing and moves nothing.
# Exit code 0 = all lines valid, 1 = at least one problem.
# -------------------------------------------------------------

import argparse
import os
import sys
from datetime import datetime
from typing import List, Optional, Tuple

from config_reader import DEFAULT_CONFIG_PATH, read_config
from models import ConfigError, ConfigParameters, MalformedLineError, MissingFileError
from reader import LineReader
from validators import validate_record


def check_file(path: str, config: ConfigParameters, now: Optional[datetime] = None) -> Tuple[bool, List[str]]:
    """
    Validate a file without routing it. Returns (ok, messages) where messages
    hold structural and rule errors in line order.
    """
    messages: List[str] = []
    with LineReader(path, config, error_sink=messages.append) as reader:
        while reader.has_next():
            try:
                record = reader.read_next()
            except MalformedLineError:
                continue
            _, errors = validate_record(record, reader.line_no, reader.file_name, now)
            messages += errors
    return len(messages) == 0, messages


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Validate one MSISDN;Amount;Timestamp file (dry run).")
    parser.add_argument("file", help="File name in InputFolder, or a path")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    args = parser.parse_args(argv)

    try:
        config = read_config(args.config)
    except ConfigError as e:
        print(f"❌ Cannot read configuration: {e}")
        return 1
    # an existing path wins; otherwise the reader resolves the name against InputFolder
    path = os.path.abspath(args.file) if os.path.exists(args.file) else args.file

    try:
        ok, messages = check_file(path, config)
    except MissingFileError as e:
        print(f"❌ Missing file: {e}")
        return 1
    if ok:
        print("✅ Validation PASSED: all lines are valid.")
        return 0
    print("❌ Validation FAILED:")
    for m in messages:
        print(" -", m)
    return 1   # failure exit code (causes CI to fail)


if __name__ == "__main__":
    sys.exit(main())
