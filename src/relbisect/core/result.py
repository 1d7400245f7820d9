"""Result types for checks and bisection runs."""

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class CheckResult(BaseModel):
    """Outcome of running the check command against one release."""

    version: str
    bin_dir: Path
    returncode: int
    bad: bool
    log_file: Path | None = None
    timestamp: datetime


class Outcome(str, Enum):
    EMPTY = "empty"
    NO_BAD = "no_bad"
    FOUND = "found"
    LISTED = "listed"


class BisectionResult(BaseModel):
    """Final result of one run, produced exactly once."""

    outcome: Outcome
    first_bad: str | None = None
    range_start: str | None = None
    range_end: str | None = None
    candidates: list[str] = []
    probes: int = 0

    def verdict(self) -> str:
        """One-line human readable verdict."""
        if self.outcome is Outcome.EMPTY:
            return "empty release range"
        if self.outcome is Outcome.FOUND:
            return f"First bad release found: {self.first_bad}"
        if self.outcome is Outcome.LISTED:
            return (
                f"{len(self.candidates)} releases in "
                f"{self.range_start}..{self.range_end}"
            )
        return "No bad releases found"
