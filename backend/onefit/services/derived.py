"""
Values derived from persisted state at write time.

Kept free of any session handling so they can be checked in isolation;
callers feed them the current maxima / timestamps they just queried.
"""
from __future__ import annotations
from datetime import datetime

from onefit.clock import as_utc
from onefit.errors import ValidationError

SET_METRICS = ("reps", "weight", "duration_seconds", "distance_meters")

_FAST_LABELS = {16: "16:8", 18: "18:6", 20: "20:4", 24: "OMAD"}


def duration_minutes(started_at: datetime, ended_at: datetime) -> int:
    """Whole minutes between start and end, rounded down."""
    seconds = (as_utc(ended_at) - as_utc(started_at)).total_seconds()
    if seconds < 0:
        raise ValidationError("ended_at cannot be before started_at")
    return int(seconds // 60)


def next_in_sequence(current_max: int | None) -> int:
    return (current_max or 0) + 1


def resolve_order_index(requested: int | None, current_max: int | None) -> int:
    # 0 (or nothing) means "append after the last entry"
    if not requested:
        return next_in_sequence(current_max)
    return requested


def target_note(target_sets: int, target_reps: str) -> str:
    return f"Target: {target_sets} sets of {target_reps}"


def copy_name(original: str) -> str:
    return f"{original} (Copy)"


def has_set_metric(values: dict) -> bool:
    return any(values.get(k) is not None for k in SET_METRICS)


def fast_type_label(goal_seconds: int) -> str:
    return _FAST_LABELS.get(goal_seconds // 3600, "custom")
