#!/usr/bin/env python3
"""relbisect CLI - find the first bad release of a project."""

import asyncio
import sys

from pydantic_settings import CliApp, CliSubCommand, get_subcommand

from relbisect.command.bisect import BisectCommand
from relbisect.command.range import RangeCommand
from relbisect.core.config import State


class CliState(State):
    """Bisect a project's published releases with a check command.

    Release tags are listed from GitHub, filtered to the requested
    range and searched with a binary search. Each probed release is
    installed into a local cache and the check command runs with
    that release first on PATH.

    Configuration sources (in priority order):
    1. Command-line arguments (--config.releases.repo value)
    2. Environment variables (RELBISECT_CONFIG__RELEASES__REPO=value)
    3. .env file
    4. relbisect.yaml in the current directory, then the user
       config directory, then package defaults

    GITHUB_TOKEN, when set, raises the GitHub API rate limit.
    """

    bisect: CliSubCommand[BisectCommand]
    range: CliSubCommand[RangeCommand]

    def cli_cmd(self):
        """Dispatch to the active subcommand, or show help."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            CliApp.run(CliState, cli_args=['--help'])
            sys.exit(1)

        with self.config:
            exit_code = asyncio.run(subcommand.run_workflow(self))
        raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState)


if __name__ == "__main__":
    main()
