"""FetchReleases node - list every published release tag."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from relbisect.core.config import State
from relbisect.core.log import logger
from relbisect.workflow.deps import BisectDeps
from relbisect.workflow.nodes.resolve_range import ResolveRange


@dataclass
class FetchReleases(BaseNode[State, BisectDeps]):
    """Drain the release lister into runtime state."""

    async def run(
        self, ctx: GraphRunContext[State, BisectDeps]
    ) -> ResolveRange:
        with logger.span("Listing releases"):
            ctx.state.runtime.bisect.tags = list(ctx.deps.list_tags())
        logger.debug(
            f"Listed {len(ctx.state.runtime.bisect.tags)} release tags"
        )
        return ResolveRange()
