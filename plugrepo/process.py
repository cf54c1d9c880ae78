"""Runner for read-only inspection commands.

Inspection commands (merge-base, tag listing, symbolic-ref) feed decisions
in the command planner. Their failures are expected in normal operation
(detached HEAD, unknown ancestry, no matching tags), so they never raise.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class InspectionResult:
    """Captured output of an inspection command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def first_line(self) -> str:
        """First line of stdout, or an empty string."""
        lines = self.stdout.splitlines()
        return lines[0].strip() if lines else ""


def working_dir(path: str | None) -> Path:
    """Directory to run inspection commands in.

    Falls back to the process directory when the working tree does not
    exist yet.
    """
    if path and Path(path).is_dir():
        return Path(path)
    return Path.cwd()


async def run_inspection(cmd: list[str], cwd: Path | None = None) -> InspectionResult:
    """Run ``cmd`` to completion, capturing stdout and stderr."""
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
    except OSError as e:
        logger.debug(f"Inspection command {cmd} could not be started: {e}")
        return InspectionResult(returncode=-1, stderr=str(e))

    result = InspectionResult(
        returncode=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )
    if not result.ok:
        logger.debug(
            f"Inspection command {cmd} exited with {result.returncode}: {result.stderr.strip()}"
        )
    return result
