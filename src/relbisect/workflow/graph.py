"""Graph workflow definition."""

from __future__ import annotations

from pydantic_graph import End, Graph

from relbisect.core.config import State
from relbisect.core.log import logger
from relbisect.core.result import BisectionResult
from relbisect.workflow.deps import BisectDeps
from relbisect.workflow.nodes import (
    Bisect,
    FetchReleases,
    Initialize,
    Report,
    ResolveRange,
)


def create_workflow() -> Graph:
    """Create the bisection workflow graph.

    Initialize → FetchReleases → ResolveRange → [Bisect →] Report
    """
    logger.debug("Building workflow graph")
    return Graph(
        nodes=(Initialize, FetchReleases, ResolveRange, Bisect, Report),
        state_type=State,
        run_end_type=BisectionResult,
    )


async def run_workflow(state: State, deps: BisectDeps) -> BisectionResult:
    """Run the graph from Initialize and return its result."""
    workflow = create_workflow()
    async with workflow.iter(Initialize(), state=state, deps=deps) as run:
        async for node in run:
            if isinstance(node, End):
                return node.data
    raise RuntimeError("Workflow ended without a result")
