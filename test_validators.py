# test_validators.py
# -------------------------------------------------------------
# Unit tests for the three business rules and validate_record().
# -------------------------------------------------------------

from datetime import datetime, timedelta

import pytest

from models import INVALID_AMOUNT, INVALID_TIMESTAMP, InputRecord
from validators import (
    is_valid_amount,
    is_valid_identifier,
    is_valid_timestamp,
    start_of_month,
    validate_record,
)


@pytest.mark.parametrize("identifier", [
    "38592112345",      # 5 trailing digits
    "385921123456",     # 6 trailing digits
    "38597912345",
    "38598999999",
    "38599100000",
    "3859212345",       # short subscriber number still accepted
])
def test_identifier_accepts_valid(identifier):
    assert is_valid_identifier(identifier)


@pytest.mark.parametrize("identifier", [
    None,
    "",
    "abc",
    "HR38592112345",    # country letters are not part of the number
    "38502112345",      # wrong prefix
    "38593112345",      # 3 is not a network digit
    "38596112345",      # 6 is not a network digit
    "38592012345",      # digit after the network digit must be 1-9
    "3859211234567",    # too long
    "385921123",        # too short
    "38592112a45",
    "38592112345 ",
    " 38592112345",
])
def test_identifier_rejects_invalid(identifier):
    assert not is_valid_identifier(identifier)


@pytest.mark.parametrize("amount,expected", [
    (-1, False), (0, False), (1, True), (500, True),
    (10000, True), (99999, True), (100000, True), (100001, False),
])
def test_amount_range(amount, expected):
    assert is_valid_amount(amount) is expected


def test_timestamp_window(now):
    month_start = start_of_month(now)
    assert month_start == datetime(2024, 6, 1)

    assert is_valid_timestamp(month_start, now)
    assert is_valid_timestamp(now - timedelta(seconds=1), now)
    assert not is_valid_timestamp(now, now)                          # upper bound is exclusive
    assert not is_valid_timestamp(now + timedelta(days=1), now)
    assert not is_valid_timestamp(month_start - timedelta(seconds=1), now)
    assert not is_valid_timestamp(INVALID_TIMESTAMP, now)


def test_timestamp_defaults_to_current_time():
    assert not is_valid_timestamp(datetime.now() + timedelta(hours=1))
    assert not is_valid_timestamp(start_of_month(datetime.now()) - timedelta(seconds=1))


def test_valid_record_passes_all_rules(now):
    record = InputRecord("3859212345", 500, datetime(2024, 6, 1, 10, 0, 0))
    ok, messages = validate_record(record, 2, "TestData.csv", now)
    assert ok
    assert messages == []


def test_bad_identifier_fails_only_identifier_rule(now):
    record = InputRecord("abc", 500, datetime(2024, 6, 1, 10, 0, 0))
    ok, messages = validate_record(record, 2, "TestData.csv", now)
    assert not ok
    assert messages == ["MSISDN in file: 'TestData.csv' at line: 2 is not valid."]


def test_all_rules_run_without_short_circuit(now):
    record = InputRecord(None, INVALID_AMOUNT, INVALID_TIMESTAMP)
    ok, messages = validate_record(record, 7, "f.csv", now)
    assert not ok
    assert messages == [
        "MSISDN in file: 'f.csv' at line: 7 is not valid.",
        "Amount in file: 'f.csv' at line: 7 is not valid.",
        "Timestamp in file: 'f.csv' at line: 7 is not valid.",
    ]


def test_amount_and_future_timestamp(now):
    record = InputRecord("38592112345", 100001, now + timedelta(minutes=5))
    ok, messages = validate_record(record, 3, "f.csv", now)
    assert not ok
    assert len(messages) == 2
    assert messages[0].startswith("Amount")
    assert messages[1].startswith("Timestamp")
