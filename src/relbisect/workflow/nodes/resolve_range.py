"""ResolveRange node - build the sorted candidate sequence."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from relbisect.core.config import State
from relbisect.core.log import logger
from relbisect.release.version import build_range
from relbisect.workflow.deps import BisectDeps
from relbisect.workflow.nodes.bisect import Bisect
from relbisect.workflow.nodes.report import Report


@dataclass
class ResolveRange(BaseNode[State, BisectDeps]):
    """Filter, deduplicate and sort the listed tags."""

    async def run(
        self, ctx: GraphRunContext[State, BisectDeps]
    ) -> Bisect | Report:
        run = ctx.state.runtime.bisect
        run.candidates = build_range(run.tags, run.lower, run.upper)
        run.status = "resolved"

        if not run.candidates:
            return Report()

        logger.info(
            f"checking {run.candidates[0]}..{run.candidates[-1]}",
            releases=len(run.candidates),
        )
        if run.command is None:
            return Report()
        return Bisect()
