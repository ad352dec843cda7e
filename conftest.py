# conftest.py
# -------------------------------------------------------------
# Shared pytest fixtures: a config snapshot over temporary
# folders, a fixed "now", and a helper to drop input files.
# -------------------------------------------------------------

from datetime import datetime

import pytest

from models import ConfigParameters

HEADER = "MSISDN;Amount;Timestamp"

# Saturday 15 June 2024, noon; everything from 1 June 00:00 up to here is "this month"
NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def config(tmp_path) -> ConfigParameters:
    folders = {name: tmp_path / name for name in ["input", "error", "archive", "output"]}
    for p in folders.values():
        p.mkdir()
    return ConfigParameters(
        input_folder=str(folders["input"]),
        error_folder=str(folders["error"]),
        archive_folder=str(folders["archive"]),
        output_folder=str(folders["output"]),
        num_of_lines=25,
    )


@pytest.fixture
def write_input(config):
    """write_input("a.csv", ["line", ...]) → path; the header row is added."""
    def _write(name, lines, header=HEADER):
        path = f"{config.input_folder}/{name}"
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join([header] + list(lines)) + "\n")
        return path
    return _write
