"""Binary search for the first failing candidate."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from relbisect.core.log import logger

T = TypeVar("T")


def find_first_bad(
    candidates: Sequence[T], is_bad: Callable[[T], bool]
) -> T | None:
    """Return the leftmost candidate for which is_bad() is true.

    Precondition (not checked): the bad candidates form a contiguous
    suffix of the sequence. Each probe may be expensive, so every
    index is probed at most once and at most ceil(log2(n)) + 1 probes
    are made. Exceptions raised by is_bad propagate unchanged.

    Args:
        candidates: Ordered candidates
        is_bad: Oracle, true when a candidate exhibits the failure

    Returns:
        First bad candidate, or None when the sequence is empty or
        no probed candidate is bad
    """
    lo, hi = 0, len(candidates)
    first_bad = None

    while lo < hi:
        mid = lo + (hi - lo) // 2
        candidate = candidates[mid]
        if is_bad(candidate):
            # Leftmost failure is at mid or before it
            first_bad = candidate
            hi = mid
        else:
            lo = mid + 1
        logger.debug(
            f"Probed {candidate}: remaining [{lo}, {hi}) "
            f"of {len(candidates)}"
        )

    return first_bad


def find_monotonic_violations(
    candidates: Sequence[T], is_bad: Callable[[T], bool]
) -> list[T]:
    """Full scan for candidates reported good after a bad one.

    Debug aid for the suffix precondition of find_first_bad(); calls
    is_bad on every candidate.
    """
    violations = []
    seen_bad = False
    for candidate in candidates:
        if is_bad(candidate):
            seen_bad = True
        elif seen_bad:
            violations.append(candidate)
    return violations
