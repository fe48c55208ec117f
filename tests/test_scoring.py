# ruff: noqa: INP001
"""Tests for the deterministic task scoring rules."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from taskdesk.services.scoring import (
    TaskScores,
    clamp_priority,
    compute_friction,
    compute_leverage,
    compute_risk,
    compute_urgency,
    parse_due_date,
    score_task,
)

NOW = datetime(2026, 3, 10, 12, 0, 0)


@pytest.mark.parametrize(("priority", "expected"), [(1, 5), (2, 4), (3, 3), (4, 2), (5, 1)])
def test_leverage_is_six_minus_priority(priority: int, expected: int) -> None:
    assert compute_leverage(priority) == expected


@pytest.mark.parametrize(("priority", "expected"), [(0, 5), (-4, 5), (6, 1), (99, 1)])
def test_leverage_clamps_priority_first(priority: int, expected: int) -> None:
    assert compute_leverage(priority) == expected


@pytest.mark.parametrize("priority", [None, "urgent", "", object()])
def test_non_numeric_priority_defaults_to_three(priority: object) -> None:
    assert clamp_priority(priority) == 3
    assert compute_leverage(priority) == 3


def test_numeric_string_priority_is_accepted() -> None:
    assert clamp_priority("2") == 2


@pytest.mark.parametrize(
    ("bucket", "expected"),
    [("today", 3), ("this_week", 2), ("later", 1), ("backlog", 1), (None, 1), ("someday", 1)],
)
def test_urgency_without_due_date_comes_from_bucket(bucket: str | None, expected: int) -> None:
    assert compute_urgency(bucket=bucket, due_date=None, now=NOW) == expected


def test_blank_due_date_string_falls_back_to_bucket() -> None:
    assert compute_urgency(bucket="today", due_date="  ", now=NOW) == 3


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (timedelta(hours=-2), 5),
        (timedelta(hours=10), 4),
        (timedelta(days=2), 3),
        (timedelta(days=6), 2),
        (timedelta(days=30), 1),
    ],
)
def test_urgency_from_due_date(offset: timedelta, expected: int) -> None:
    assert compute_urgency(bucket="backlog", due_date=NOW + offset, now=NOW) == expected


@pytest.mark.parametrize(
    ("hours", "expected"),
    [(0, 4), (24, 4), (24.01, 3), (72, 3), (72.01, 2), (168, 2), (168.01, 1)],
)
def test_urgency_threshold_boundaries_are_inclusive(hours: float, expected: int) -> None:
    due = NOW + timedelta(hours=hours)
    assert compute_urgency(bucket=None, due_date=due, now=NOW) == expected


def test_due_date_overrides_bucket() -> None:
    due = NOW + timedelta(days=30)
    assert compute_urgency(bucket="today", due_date=due, now=NOW) == 1


def test_iso_string_due_date_is_parsed() -> None:
    assert compute_urgency(bucket=None, due_date="2026-03-10T22:00:00", now=NOW) == 4


def test_timezone_aware_due_date_is_compared_in_utc() -> None:
    # 19:00 at UTC+08:00 is 11:00 UTC, an hour before NOW.
    due = "2026-03-10T19:00:00+08:00"
    assert compute_urgency(bucket=None, due_date=due, now=NOW) == 5


def test_unparsable_due_date_is_urgency_one() -> None:
    assert compute_urgency(bucket="today", due_date="next tuesday-ish", now=NOW) == 1


@pytest.mark.parametrize("due", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00"])
def test_due_date_outside_utc_range_is_urgency_one(due: str) -> None:
    assert compute_urgency(bucket="today", due_date=due, now=NOW) == 1
    with pytest.raises(ValueError, match="representable UTC range"):
        parse_due_date(due)


@pytest.mark.parametrize(("urgency", "risk"), [(1, 2), (2, 2), (3, 3), (4, 4), (5, 4)])
def test_risk_from_urgency(urgency: int, risk: int) -> None:
    assert compute_risk(urgency) == risk


@pytest.mark.parametrize(
    ("description", "friction"),
    [
        ("", 2),
        (None, 2),
        ("Gather receipts for TAX filing", 3),
        ("ask the Accounting team", 3),
        ("review legal docs", 3),
        ("Call mom", 1),
        ("email the landlord", 1),
        ("call the lawyer about legal stuff", 3),
        ("water the plants", 2),
    ],
)
def test_friction_keyword_scan(description: str | None, friction: int) -> None:
    assert compute_friction(description) == friction


def test_worked_example_score_is_nine() -> None:
    scores = score_task(priority=1, bucket="today", due_date=None, description="", now=NOW)
    assert scores == TaskScores(leverage=5, urgency=3, risk=3, friction=2, score=9)


def test_score_is_unclamped_sum() -> None:
    scores = score_task(
        priority=5,
        bucket="backlog",
        due_date=None,
        description="sort out accounting",
        now=NOW,
    )
    assert scores.score == scores.leverage + scores.urgency + scores.risk - scores.friction
    assert scores.score == 1 + 1 + 2 - 3


def test_score_is_deterministic_for_fixed_now() -> None:
    kwargs = {
        "priority": 2,
        "bucket": "this_week",
        "due_date": NOW + timedelta(hours=30),
        "description": "email the accountant",
        "now": NOW,
    }
    assert score_task(**kwargs) == score_task(**kwargs)


def test_parse_due_date_variants() -> None:
    assert parse_due_date(None) is None
    assert parse_due_date("") is None
    assert parse_due_date("2026-03-11") == datetime(2026, 3, 11)
    assert parse_due_date("2026-03-11T08:30:00Z") == datetime(2026, 3, 11, 8, 30)
    aware = datetime(2026, 3, 11, 10, 0, tzinfo=UTC)
    assert parse_due_date(aware) == datetime(2026, 3, 11, 10, 0)
    with pytest.raises(ValueError):
        parse_due_date("soon")
    with pytest.raises(ValueError):
        parse_due_date(12345)
