# validators.py
# -------------------------------------------------------------
# Business-rule checks for one input record.
# Each check returns a list of messages (empty = passed).
# Exposes: validate_record() -> (ok: bool, messages: List[str])
# -------------------------------------------------------------

import logging
import re
from datetime import datetime
from typing import List, Optional, Tuple

from models import InputRecord

LOGGER = logging.getLogger("txn_pipeline.validators")

# ---------- Rule parameters ----------

# Country code 3859, network digit, non-zero digit, then the subscriber digits
# (4 to 6 of them: the 10-digit form like 3859212345 is accepted too)
MSISDN_RE = re.compile(r"^3859[12789][1-9]\d{4,6}$", re.ASCII)

MIN_AMOUNT = 0          # exclusive
MAX_AMOUNT = 100000     # inclusive, in cents


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

# ---------- Predicates ----------

def is_valid_identifier(identifier: Optional[str]) -> bool:
    if identifier is None:
        return False
    return MSISDN_RE.fullmatch(identifier) is not None

def is_valid_amount(amount: int) -> bool:
    return MIN_AMOUNT < amount <= MAX_AMOUNT

def is_valid_timestamp(timestamp: datetime, now: Optional[datetime] = None) -> bool:
    """
    True iff the timestamp lies in the current month and is in the past:
    start_of_month(now) <= timestamp < now.
    """
    now = now or datetime.now()
    return start_of_month(now) <= timestamp < now

# ---------- Checks (one message per failed rule) ----------

def check_identifier(record: InputRecord, file_name: str, line_no: int) -> List[str]:
    if is_valid_identifier(record.identifier):
        return []
    err = f"MSISDN in file: '{file_name}' at line: {line_no} is not valid."
    LOGGER.error(err)
    if record.identifier is None:
        LOGGER.error("\tMSISDN is missing")
    return [err]

def check_amount(record: InputRecord, file_name: str, line_no: int) -> List[str]:
    if is_valid_amount(record.amount):
        return []
    err = f"Amount in file: '{file_name}' at line: {line_no} is not valid."
    LOGGER.error(err)
    if record.amount > MAX_AMOUNT:
        LOGGER.error("\tAmount cannot be greater than %d", MAX_AMOUNT)
    else:
        LOGGER.error("\tAmount must be greater than %d", MIN_AMOUNT)
    return [err]

def check_timestamp(record: InputRecord, file_name: str, line_no: int,
                    now: Optional[datetime] = None) -> List[str]:
    now = now or datetime.now()
    if is_valid_timestamp(record.timestamp, now):
        return []
    err = f"Timestamp in file: '{file_name}' at line: {line_no} is not valid."
    LOGGER.error(err)
    if record.timestamp >= now:
        LOGGER.error("\tTimestamp cannot be greater than the current timestamp: %s", now)
    else:
        LOGGER.error("\tTimestamp must be within the current month")
    return [err]

# ---------- Main entry point ----------

def validate_record(record: InputRecord, line_no: int, file_name: str,
                    now: Optional[datetime] = None) -> Tuple[bool, List[str]]:
    """
    Run all three rules on one record. Every rule runs even if an earlier one
    failed, so a line can contribute up to three messages.
    Returns (ok, messages). ok==True if no rule failed.
    """
    now = now or datetime.now()
    messages: List[str] = []

    messages += check_identifier(record, file_name, line_no)
    messages += check_amount(record, file_name, line_no)
    messages += check_timestamp(record, file_name, line_no, now)

    ok = len(messages) == 0
    return ok, messages
