"""Check runner: run the user's command against an installed release."""

import os
from datetime import datetime
from pathlib import Path

from relbisect.core.result import CheckResult
from relbisect.core.runner import Runner


def prepend_path(bin_dir: Path, path: str | None) -> str:
    """Return a PATH value that searches bin_dir first."""
    if path:
        return f"{bin_dir}{os.pathsep}{path}"
    return str(bin_dir)


class CheckRunner:
    """Execute the check command and optionally keep its output."""

    def __init__(
        self,
        command: str,
        output_dir: Path | None = None,
        runner: Runner | None = None,
        base_path: str | None = None,
    ):
        """Initialize check runner.

        Args:
            command: Shell command whose non-zero exit means "bad"
            output_dir: Directory for per-check log files, or None
            runner: Command runner (a fresh Runner by default)
            base_path: PATH to extend; the process PATH by default
        """
        self.command = command
        self.output_dir = output_dir
        self.runner = runner or Runner()
        self.base_path = (
            base_path if base_path is not None else os.environ.get("PATH")
        )

    def run(self, version, bin_dir: Path) -> CheckResult:
        """Run the check with bin_dir first on PATH.

        Output is passed through to the terminal. A command that
        cannot be started counts as bad, like any non-zero exit.
        """
        timestamp = datetime.now()
        log_file = None
        if self.output_dir is not None:
            log_file = self.output_dir / (
                f"check-{version}-{timestamp.strftime('%Y%m%d-%H%M%S')}.log"
            )

        result = self.runner.execute(
            self.command,
            env={"PATH": prepend_path(bin_dir, self.base_path)},
            stream=True,
            log_file=log_file,
            check=False,
        )

        return CheckResult(
            version=str(version),
            bin_dir=bin_dir,
            returncode=result.exited,
            bad=result.exited != 0,
            log_file=log_file,
            timestamp=timestamp,
        )
