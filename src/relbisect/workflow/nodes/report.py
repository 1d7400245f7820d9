"""Report node - log the verdict and end the run."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from relbisect.core.config import State
from relbisect.core.log import logger
from relbisect.core.result import BisectionResult, Outcome
from relbisect.workflow.deps import BisectDeps


@dataclass
class Report(BaseNode[State, BisectDeps, BisectionResult]):
    """Build the BisectionResult from runtime state."""

    async def run(
        self, ctx: GraphRunContext[State, BisectDeps]
    ) -> End[BisectionResult]:
        run = ctx.state.runtime.bisect
        candidates = [str(v) for v in run.candidates]

        if not candidates:
            outcome = Outcome.EMPTY
        elif run.command is None:
            outcome = Outcome.LISTED
        elif run.first_bad is not None:
            outcome = Outcome.FOUND
        else:
            outcome = Outcome.NO_BAD

        result = BisectionResult(
            outcome=outcome,
            first_bad=(
                str(run.first_bad) if run.first_bad is not None else None
            ),
            range_start=candidates[0] if candidates else None,
            range_end=candidates[-1] if candidates else None,
            candidates=candidates,
            probes=len(run.probes),
        )

        if outcome is Outcome.LISTED:
            for version in candidates:
                logger.info(version)

        run.status = "complete"
        logger.info(result.verdict())
        return End(result)
