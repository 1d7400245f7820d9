"""Bisect node - search the candidates for the first bad release."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from relbisect.core.config import State
from relbisect.core.log import logger
from relbisect.search import find_first_bad, find_monotonic_violations
from relbisect.workflow.deps import BisectDeps
from relbisect.workflow.nodes.report import Report


@dataclass
class Bisect(BaseNode[State, BisectDeps]):
    """Run find_first_bad() with the injected oracle.

    Oracle failures (provisioning errors) propagate and abort the run.
    """

    async def run(self, ctx: GraphRunContext[State, BisectDeps]) -> Report:
        run = ctx.state.runtime.bisect
        oracle = ctx.deps.oracle
        if oracle is None:
            raise ValueError("Bisect requires an oracle")

        def is_bad(version) -> bool:
            bad = oracle(version)
            run.probes.append((str(version), bad))
            return bad

        with logger.span(
            "Bisecting {count} releases", count=len(run.candidates)
        ):
            run.first_bad = find_first_bad(run.candidates, is_bad)
        run.status = "bisected"

        if run.verify:
            logger.info("Verifying monotonic failure over all releases")
            run.violations = find_monotonic_violations(
                run.candidates, oracle
            )
            if run.violations:
                logger.warning(
                    "Releases pass after an earlier release failed; "
                    "the first bad result may be unreliable",
                    releases=[str(v) for v in run.violations],
                )

        return Report()
