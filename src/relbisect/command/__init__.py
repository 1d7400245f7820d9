"""CLI command modules for relbisect."""

from relbisect.command.bisect import BisectCommand
from relbisect.command.range import RangeCommand

__all__ = ["BisectCommand", "RangeCommand"]
