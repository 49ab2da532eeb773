# app/utils/conflict.py
from typing import Iterable, NamedTuple, Optional

from app.utils.timeformat import to_minutes


MISSING_TIMES = "Please set start and end times."
BAD_ORDER = "End time must be after start time."
TIME_CONFLICT = "Time Conflict! You already have a class scheduled during this time."


class Admission(NamedTuple):
    admitted: bool
    conflicting_session: Optional[object] = None


def check_time_window(start_time: Optional[str], end_time: Optional[str]) -> Optional[str]:
    """
    First gate of a save, before the overlap check.
    Returns the error message, or None when the window is usable.
    Times are picker values (HH:MM), so string order is time order.
    """
    if not start_time or not end_time:
        return MISSING_TIMES
    if start_time >= end_time:
        return BAD_ORDER
    return None


def overlaps(start_a, end_a, start_b, end_b) -> bool:
    """
    Half-open [start, end) overlap on minute values.
    Touching endpoints do not overlap.
    """
    return start_a < end_b and end_a > start_b


def check_admission(candidate, existing_sessions: Iterable, exclude_id: Optional[str] = None) -> Admission:
    """
    candidate: has day / start_time / end_time
    existing_sessions: every known session (any day), each with id / day / start_time / end_time

    判斷是否衝堂：
    1. 同一天、且不是正在編輯的那一筆
    2. 時間區間有重疊
    Times that cannot be parsed never block a save.
    """
    start_a = to_minutes(candidate.start_time)
    end_a = to_minutes(candidate.end_time)

    for s in existing_sessions:
        if exclude_id is not None and s.id == exclude_id:
            continue
        if s.day != candidate.day:
            continue

        start_b = to_minutes(s.start_time)
        end_b = to_minutes(s.end_time)
        if None in (start_a, end_a, start_b, end_b):
            continue

        if overlaps(start_a, end_a, start_b, end_b):
            return Admission(False, s)

    return Admission(True)
