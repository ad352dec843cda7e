# generator.py
# -------------------------------------------------------------
# Synthetic test data: MSISDN;Amount;Timestamp rows written to
# <InputFolder>/TestData_<yyyyMMdd_HHmmss>.csv.
# No validation here: the output is the parser's test input.
# -------------------------------------------------------------

import logging
import os
import time
from datetime import datetime
from typing import Optional

import numpy as np
import pandas as pd

from models import CSV_HEADER, CSV_SEPARATOR, TIMESTAMP_FORMAT, ConfigParameters
from validators import start_of_month

LOGGER = logging.getLogger("txn_pipeline.generator")

MSISDN_START = "3859"
NETWORK_DIGITS = np.array(["1", "2", "7", "8", "9"])
MIN_AMOUNT = 1          # inclusive
MAX_AMOUNT = 10000      # exclusive


def generate_msisdns(n: int, rng: np.random.Generator) -> np.ndarray:
    """3859 + network digit + non-zero digit + 5 or 6 digits."""
    network = rng.choice(NETWORK_DIGITS, size=n)
    second = rng.integers(1, 10, size=n)
    tail_len = np.where(rng.random(n) > 0.5, 6, 5)
    tails = [
        "".join(map(str, rng.integers(0, 10, size=k)))
        for k in tail_len
    ]
    return np.array([
        f"{MSISDN_START}{net}{sec}{tail}"
        for net, sec, tail in zip(network, second, tails)
    ])


def generate_timestamps(n: int, now: datetime, rng: np.random.Generator) -> pd.Series:
    """Whole-second timestamps in [start of month, now), formatted for the CSV."""
    month_start = start_of_month(now)
    span = max(int((now - month_start).total_seconds()), 1)
    offsets = rng.integers(0, span, size=n)
    stamps = pd.Timestamp(month_start) + pd.to_timedelta(offsets, unit="s")
    return pd.Series(stamps).dt.strftime(TIMESTAMP_FORMAT)


def generate_records(n: int, now: Optional[datetime] = None,
                     rng: Optional[np.random.Generator] = None) -> pd.DataFrame:
    """
    Build n random rows with the CSV header columns (MSISDN, Amount, Timestamp).
    Pass a seeded rng for reproducible output.
    """
    now = now or datetime.now()
    rng = rng if rng is not None else np.random.default_rng()
    return pd.DataFrame({
        CSV_HEADER[0]: generate_msisdns(n, rng),
        CSV_HEADER[1]: rng.integers(MIN_AMOUNT, MAX_AMOUNT, size=n),
        CSV_HEADER[2]: generate_timestamps(n, now, rng).to_numpy(),
    })


def generate_csv(config: ConfigParameters, num_of_lines: Optional[int] = None,
                 now: Optional[datetime] = None,
                 rng: Optional[np.random.Generator] = None) -> str:
    """
    Write a generated file into the input folder and return its path.
    num_of_lines defaults to the config's lineNo.
    """
    now = now or datetime.now()
    n = config.num_of_lines if num_of_lines is None else num_of_lines
    file_name = f"TestData_{now:%Y%m%d_%H%M%S}.csv"
    path = os.path.join(config.input_folder, file_name)

    os.makedirs(config.input_folder, exist_ok=True)
    LOGGER.info("Generating: %s with: %d lines...", file_name, n)
    started = time.perf_counter()

    df = generate_records(n, now=now, rng=rng)
    df.to_csv(path, sep=CSV_SEPARATOR, index=False, lineterminator="\n")

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    LOGGER.info("Finished generating %s in %d milliseconds.", file_name, elapsed_ms)
    return path
