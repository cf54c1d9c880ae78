"""Command models returned by the command planner."""

from __future__ import annotations

import shlex

from pydantic import BaseModel, ConfigDict, Field


class Command(BaseModel):
    """A single external command: executable plus ordered arguments."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(..., description="Executable path")
    args: list[str] = Field(default_factory=list, description="Ordered argument vector")

    @property
    def argv(self) -> list[str]:
        """Full argument vector including the executable."""
        return [self.command, *self.args]

    def display(self) -> str:
        """Shell-quoted command line for display."""
        return shlex.join(self.argv)


# Order is significant: callers run the commands exactly in this sequence.
CommandPlan = list[Command]
