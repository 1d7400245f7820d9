"""Workflow nodes for the bisection graph."""

from relbisect.workflow.nodes.bisect import Bisect
from relbisect.workflow.nodes.fetch_releases import FetchReleases
from relbisect.workflow.nodes.initialize import Initialize
from relbisect.workflow.nodes.report import Report
from relbisect.workflow.nodes.resolve_range import ResolveRange

__all__ = [
    "Initialize",
    "FetchReleases",
    "ResolveRange",
    "Bisect",
    "Report",
]
