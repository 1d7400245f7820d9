"""Bisect command - find the first bad release."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ConfigDict, Field

from relbisect.core.log import logger
from relbisect.release.provision import ProvisioningError
from relbisect.release.version import VersionParseError

if TYPE_CHECKING:
    from relbisect.core.config import State
    from relbisect.workflow.deps import BisectDeps

# Errors that end a run with a message and exit status 1
FATAL_ERRORS = (
    VersionParseError,
    ProvisioningError,
    httpx.HTTPError,
    OSError,
)


async def execute(state: State, deps: BisectDeps | None = None) -> int:
    """Run the workflow for the bounds already stored in state.

    Real collaborators are built from state.config unless deps is
    given.

    Returns:
        Exit code (0 for every normal outcome, 1 on a fatal error)
    """
    from relbisect.workflow.deps import open_deps
    from relbisect.workflow.graph import run_workflow

    run = state.runtime.bisect
    try:
        if deps is not None:
            result = await run_workflow(state, deps)
        else:
            with open_deps(state.config, run.command) as real_deps:
                result = await run_workflow(state, real_deps)
    except FATAL_ERRORS as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    logger.debug("Run finished", outcome=result.outcome.value)
    return 0


class BisectCommand(BaseModel):
    """Find the first release for which a check command fails.

    Every release between the two bounds (inclusive) is a candidate.
    Each probed release is installed into the cache, prepended to
    PATH, and the check command is run; a non-zero exit marks the
    release as bad. Failure is assumed to be monotonic: once a
    release is bad, every later release is bad too.
    """

    lower: str = Field(
        alias="from", description="Known good (lower) version"
    )
    upper: str = Field(
        alias="to", description="Known bad or suspect (upper) version"
    )
    cmd: str = Field(
        description="Check command; non-zero exit means the release is bad"
    )
    verify: bool = Field(
        default=False,
        description=(
            "After bisecting, check every release and warn if a "
            "release passes after an earlier one failed"
        ),
    )

    model_config = ConfigDict(populate_by_name=True)

    async def run_workflow(self, state: State) -> int:
        """Run the bisection workflow.

        Returns:
            Exit code (0=success, 1=fatal error)
        """
        run = state.runtime.bisect
        run.lower_text = self.lower
        run.upper_text = self.upper
        run.command = self.cmd
        run.verify = self.verify
        return await execute(state)
