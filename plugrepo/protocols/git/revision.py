"""Read the checked-out revision straight from the git metadata directory."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

GITDIR_PREFIX = "gitdir:"
REF_PREFIX = "ref: "


def _first_line(path: Path) -> str | None:
    try:
        text = path.read_text(errors="replace")
    except OSError:
        return None
    lines = text.splitlines()
    return lines[0].strip() if lines else ""


def get_git_dir(work_tree: str | Path) -> Path | None:
    """Locate the metadata directory of a working tree.

    Handles both a ``.git`` directory and a ``.git`` file pointing
    elsewhere (linked worktrees and submodules).
    """
    dot_git = Path(work_tree) / ".git"
    if dot_git.is_dir():
        return dot_git
    if not dot_git.is_file():
        return None

    line = _first_line(dot_git)
    if not line or not line.startswith(GITDIR_PREFIX):
        return None
    git_dir = Path(line[len(GITDIR_PREFIX):].strip())
    if not git_dir.is_absolute():
        git_dir = Path(work_tree) / git_dir
    return git_dir if git_dir.is_dir() else None


def get_common_dir(git_dir: Path) -> Path:
    """Directory holding shared refs; differs from ``git_dir`` for worktrees."""
    line = _first_line(git_dir / "commondir")
    if not line:
        return git_dir
    common = Path(line)
    if not common.is_absolute():
        common = git_dir / common
    return common if common.is_dir() else git_dir


def read_packed_ref(common_dir: Path, ref: str) -> str:
    """Hash of ``ref`` in ``packed-refs``, or an empty string."""
    try:
        text = (common_dir / "packed-refs").read_text(errors="replace")
    except OSError:
        return ""
    for line in text.splitlines():
        # "# pack-refs with: ..." header and "^<hash>" peeled tag lines
        if line.startswith(("#", "^")):
            continue
        parts = line.split()
        if len(parts) == 2 and parts[1] == ref:
            return parts[0]
    return ""


def read_ref(git_dir: Path, ref: str) -> str:
    """Resolve a symbolic ref from loose ref files, then ``packed-refs``."""
    common_dir = get_common_dir(git_dir)
    for base in dict.fromkeys((git_dir, common_dir)):
        line = _first_line(base / ref)
        if line:
            return line
    return read_packed_ref(common_dir, ref)


def read_revision(work_tree: str | Path) -> str:
    """Revision currently checked out in ``work_tree``.

    Returns an empty string if it cannot be determined.
    """
    git_dir = get_git_dir(work_tree)
    if git_dir is None:
        logger.debug(f"No git metadata directory in {work_tree}")
        return ""

    head = _first_line(git_dir / "HEAD")
    if not head:
        return ""

    if head.startswith(REF_PREFIX):
        return read_ref(git_dir, head[len(REF_PREFIX):].strip())

    return head
