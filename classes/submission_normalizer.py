import math
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_SUBMIT_REASON = "Quiz submitted"

# Keeps counts, and marks derived from them, inside a 32-bit INTEGER column
MAX_COUNT = 1000000


@dataclass(frozen=True)
class NormalizedSubmission:
    answers: List[Optional[int]] = field(default_factory=list)
    hints_used: int = 0
    tab_switch_count: int = 0
    time_taken: Optional[float] = None
    auto_submitted: bool = False
    auto_submit_reason: str = DEFAULT_SUBMIT_REASON


def finite_number(value):
    """Return value if it is a real finite number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        if not math.isfinite(value):
            return None
    except OverflowError:
        # int too large to convert to float
        return None
    return value


def normalize_answer(value):
    number = finite_number(value)
    if number is None or number != int(number):
        return None
    return int(number)


def normalize_answers(raw_answers):
    if not isinstance(raw_answers, (list, tuple)):
        return []
    return [normalize_answer(a) for a in raw_answers]


def normalize_count(value):
    """Non-negative whole count capped at MAX_COUNT, 0 for anything unusable."""
    number = finite_number(value)
    if number is None or number < 0:
        return 0
    return min(int(number), MAX_COUNT)


def normalize_time_taken(value):
    # None means unknown, which is not the same as 0 seconds
    number = finite_number(value)
    if number is None or number < 0:
        return None
    return number


def normalize_auto_submit(raw_reason):
    if not raw_reason or raw_reason == DEFAULT_SUBMIT_REASON:
        return False, DEFAULT_SUBMIT_REASON
    return True, str(raw_reason)


def normalize_submission(raw_answers=None, raw_hints=None, raw_auto_submit_reason=None,
                         raw_time_taken=None, raw_tab_switch_count=None):
    """
    Turn untrusted client fields into a NormalizedSubmission.

    Never raises: malformed input degrades to empty answers, zero counts and an
    unknown time. Answers are kept at the length the client sent; truncation to
    the quiz length happens when the record is built.
    """
    auto_submitted, reason = normalize_auto_submit(raw_auto_submit_reason)
    return NormalizedSubmission(
        answers=normalize_answers(raw_answers),
        hints_used=normalize_count(raw_hints),
        tab_switch_count=normalize_count(raw_tab_switch_count),
        time_taken=normalize_time_taken(raw_time_taken),
        auto_submitted=auto_submitted,
        auto_submit_reason=reason,
    )
