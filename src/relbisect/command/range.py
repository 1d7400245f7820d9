"""Range command - show the candidate releases without checking them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from relbisect.command.bisect import execute

if TYPE_CHECKING:
    from relbisect.core.config import State


class RangeCommand(BaseModel):
    """List the releases a bisection between two versions would search.

    Nothing is installed and no check command is run.
    """

    lower: str = Field(alias="from", description="Lower version")
    upper: str = Field(alias="to", description="Upper version")

    model_config = ConfigDict(populate_by_name=True)

    async def run_workflow(self, state: State) -> int:
        run = state.runtime.bisect
        run.lower_text = self.lower
        run.upper_text = self.upper
        run.command = None
        return await execute(state)
