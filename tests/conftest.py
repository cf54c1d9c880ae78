"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import AsyncMock, patch

import pytest

from plugrepo.host import LocalHost
from plugrepo.models.config import GitConfig
from plugrepo.models.plugin import Plugin
from plugrepo.process import InspectionResult
from plugrepo.protocols.git import GitProtocol


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def host(temp_dir: Path) -> LocalHost:
    """Host storing repositories under a temporary base path."""
    return LocalHost(temp_dir / "base", cwd=temp_dir)


@pytest.fixture
def git_config() -> GitConfig:
    """Default git parameters."""
    return GitConfig()


@pytest.fixture
def git_protocol(host: LocalHost) -> GitProtocol:
    return GitProtocol(host)


@pytest.fixture
def cloned_plugin(temp_dir: Path) -> Plugin:
    """Plugin whose working tree already exists on disk."""
    path = temp_dir / "repos" / "github.com" / "Shougo" / "dpp.vim"
    path.mkdir(parents=True)
    return Plugin(name="dpp.vim", repo="Shougo/dpp.vim", path=str(path))


@pytest.fixture
def missing_plugin(temp_dir: Path) -> Plugin:
    """Plugin whose working tree has not been cloned yet."""
    path = temp_dir / "repos" / "github.com" / "Shougo" / "dpp.vim"
    return Plugin(name="dpp.vim", repo="Shougo/dpp.vim", path=str(path))


@pytest.fixture
def make_git_dir(temp_dir: Path) -> Callable[..., Path]:
    """Create a fake working tree with a .git metadata directory.

    Args (of the returned builder):
        head: Content of HEAD
        refs: Loose ref name -> hash
        packed_refs: Raw packed-refs content
    """

    def build(
        head: str = "ref: refs/heads/main\n",
        refs: dict[str, str] | None = None,
        packed_refs: str | None = None,
        name: str = "work",
    ) -> Path:
        work_tree = temp_dir / name
        git_dir = work_tree / ".git"
        git_dir.mkdir(parents=True)
        (git_dir / "HEAD").write_text(head)
        for ref, sha in (refs or {}).items():
            ref_path = git_dir / ref
            ref_path.parent.mkdir(parents=True, exist_ok=True)
            ref_path.write_text(sha + "\n")
        if packed_refs is not None:
            (git_dir / "packed-refs").write_text(packed_refs)
        return work_tree

    return build


@pytest.fixture
def mock_inspection() -> Generator[AsyncMock, None, None]:
    """Patch the inspection runner used by the git planner.

    Set ``side_effect`` or ``return_value`` to InspectionResult objects.
    """
    with patch(
        "plugrepo.protocols.git.protocol.run_inspection",
        new_callable=AsyncMock,
    ) as mock:
        mock.return_value = InspectionResult(returncode=0, stdout="")
        yield mock
