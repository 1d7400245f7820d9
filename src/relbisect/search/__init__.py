"""Search over ordered candidates driven by a boolean oracle."""

from relbisect.search.bisect import find_first_bad, find_monotonic_violations

__all__ = ["find_first_bad", "find_monotonic_violations"]
