"""Initialize node - validate the version bounds before any I/O."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from relbisect.core.config import State
from relbisect.core.log import logger
from relbisect.release.version import parse_version
from relbisect.workflow.deps import BisectDeps
from relbisect.workflow.nodes.fetch_releases import FetchReleases


@dataclass
class Initialize(BaseNode[State, BisectDeps]):
    """Parse both bounds; a malformed bound aborts the run.

    Raises:
        VersionParseError: If either bound is not a version
    """

    async def run(
        self, ctx: GraphRunContext[State, BisectDeps]
    ) -> FetchReleases:
        run = ctx.state.runtime.bisect
        run.lower = parse_version(run.lower_text)
        run.upper = parse_version(run.upper_text)
        run.status = "running"

        if run.lower > run.upper:
            logger.warning(
                f"Lower bound {run.lower} is above upper bound {run.upper}"
            )
        return FetchReleases()
