"""Deterministic task scoring: Leverage, Urgency, Risk, Friction, and Score.

Scores drive list context for the assistant and are recomputed every time a
task is reported; nothing here touches the database. The only external input
is the reference time used for urgency, which callers may pin via ``now``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime

from taskdesk.core.time import utcnow
from taskdesk.models.tasks import DEFAULT_PRIORITY, MAX_PRIORITY, MIN_PRIORITY

HIGH_FRICTION_TERMS = ("tax", "accounting", "legal")
LOW_FRICTION_TERMS = ("call", "email")
BUCKET_URGENCY = {"today": 3, "this_week": 2}

# (upper bound in hours, urgency); overdue is handled separately.
DUE_URGENCY_THRESHOLDS = ((24, 4), (72, 3), (168, 2))


@dataclass(frozen=True)
class TaskScores:
    """Sub-scores and composite ordering score for one task snapshot."""

    leverage: int
    urgency: int
    risk: int
    friction: int
    score: int


def parse_due_date(value: object) -> datetime | None:
    """Parse a due date into naive UTC.

    Returns ``None`` for missing or blank values and raises ``ValueError`` when
    the value cannot be read as a timestamp. Date-only values mean midnight UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        parsed = datetime.fromisoformat(text)
    else:
        msg = f"Unsupported due date value: {value!r}"
        raise ValueError(msg)
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(UTC).replace(tzinfo=None)
        except OverflowError as exc:
            msg = f"Due date is outside the representable UTC range: {value!r}"
            raise ValueError(msg) from exc
    return parsed


def clamp_priority(priority: object, *, default: int = DEFAULT_PRIORITY) -> int:
    """Coerce a priority to an int in [1, 5]; non-numeric values become ``default``."""
    if isinstance(priority, bool):
        value = default
    else:
        try:
            value = int(priority)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            value = default
    return max(MIN_PRIORITY, min(MAX_PRIORITY, value))


def compute_urgency(
    *,
    bucket: str | None,
    due_date: object,
    now: datetime | None = None,
) -> int:
    try:
        due = parse_due_date(due_date)
    except ValueError:
        return 1
    if due is None:
        return BUCKET_URGENCY.get(bucket or "", 1)

    reference = now if now is not None else utcnow()
    if reference.tzinfo is not None:
        reference = reference.astimezone(UTC).replace(tzinfo=None)
    hours_left = (due - reference).total_seconds() / 3600
    if hours_left < 0:
        return 5
    for limit, urgency in DUE_URGENCY_THRESHOLDS:
        if hours_left <= limit:
            return urgency
    return 1


def compute_leverage(priority: object) -> int:
    return 6 - clamp_priority(priority)


def compute_risk(urgency: int) -> int:
    if urgency >= 4:
        return 4
    if urgency == 3:
        return 3
    return 2


def compute_friction(description: str | None) -> int:
    text = (description or "").lower()
    if not text:
        return 2
    if any(term in text for term in HIGH_FRICTION_TERMS):
        return 3
    if any(term in text for term in LOW_FRICTION_TERMS):
        return 1
    return 2


def score_task(
    *,
    priority: object,
    bucket: str | None,
    due_date: object,
    description: str | None,
    now: datetime | None = None,
) -> TaskScores:
    """Score a task snapshot; identical inputs at a fixed ``now`` give identical output."""
    leverage = compute_leverage(priority)
    urgency = compute_urgency(bucket=bucket, due_date=due_date, now=now)
    risk = compute_risk(urgency)
    friction = compute_friction(description)
    return TaskScores(
        leverage=leverage,
        urgency=urgency,
        risk=risk,
        friction=friction,
        score=leverage + urgency + risk - friction,
    )
