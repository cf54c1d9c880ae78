"""Tests for reading the current revision from git metadata."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from plugrepo.models.plugin import Plugin
from plugrepo.protocols.git import GitProtocol
from plugrepo.protocols.git.revision import get_git_dir, read_revision

HEAD_SHA = "3f2a9c1d8e7b6a5f4e3d2c1b0a9f8e7d6c5b4a39"
TAG_SHA = "9e8d7c6b5a493827161504f3e2d1c0b9a8f7e6d5"

PACKED_REFS = f"""# pack-refs with: peeled fully-peeled sorted
{TAG_SHA} refs/tags/v1.0
^0123456789abcdef0123456789abcdef01234567
{HEAD_SHA} refs/heads/main
"""


class TestReadRevision:
    """Tests for read_revision."""

    def test_loose_ref(self, make_git_dir: Callable[..., Path]) -> None:
        work_tree = make_git_dir(refs={"refs/heads/main": HEAD_SHA})
        assert read_revision(work_tree) == HEAD_SHA

    def test_packed_ref(self, make_git_dir: Callable[..., Path]) -> None:
        work_tree = make_git_dir(packed_refs=PACKED_REFS)
        assert read_revision(work_tree) == HEAD_SHA

    def test_packed_ref_requires_exact_name(self, make_git_dir: Callable[..., Path]) -> None:
        work_tree = make_git_dir(
            head="ref: refs/heads/ma\n", packed_refs=PACKED_REFS
        )
        assert read_revision(work_tree) == ""

    def test_loose_ref_preferred_over_packed(self, make_git_dir: Callable[..., Path]) -> None:
        work_tree = make_git_dir(
            refs={"refs/heads/main": TAG_SHA}, packed_refs=PACKED_REFS
        )
        assert read_revision(work_tree) == TAG_SHA

    def test_detached_head(self, make_git_dir: Callable[..., Path]) -> None:
        work_tree = make_git_dir(head=f"{HEAD_SHA}\n")
        assert read_revision(work_tree) == HEAD_SHA

    def test_missing_ref_and_packed_refs(self, make_git_dir: Callable[..., Path]) -> None:
        work_tree = make_git_dir()
        assert read_revision(work_tree) == ""

    def test_no_git_dir(self, temp_dir: Path) -> None:
        assert read_revision(temp_dir) == ""
        assert read_revision(temp_dir / "missing") == ""

    def test_empty_head(self, make_git_dir: Callable[..., Path]) -> None:
        work_tree = make_git_dir(head="")
        assert read_revision(work_tree) == ""


class TestGitFile:
    """Working trees whose .git is a file (worktrees, submodules)."""

    def test_relative_gitdir(self, temp_dir: Path) -> None:
        git_dir = temp_dir / "modules" / "plugin"
        git_dir.mkdir(parents=True)
        (git_dir / "HEAD").write_text(f"{HEAD_SHA}\n")
        work_tree = temp_dir / "plugin"
        work_tree.mkdir()
        (work_tree / ".git").write_text("gitdir: ../modules/plugin\n")

        assert get_git_dir(work_tree) == work_tree / "../modules/plugin"
        assert read_revision(work_tree) == HEAD_SHA

    def test_worktree_uses_common_dir(self, temp_dir: Path) -> None:
        main_git = temp_dir / "main" / ".git"
        (main_git / "refs" / "heads").mkdir(parents=True)
        (main_git / "refs" / "heads" / "feature").write_text(f"{HEAD_SHA}\n")
        worktree_git = main_git / "worktrees" / "feature"
        worktree_git.mkdir(parents=True)
        (worktree_git / "HEAD").write_text("ref: refs/heads/feature\n")
        (worktree_git / "commondir").write_text("../..\n")
        work_tree = temp_dir / "feature"
        work_tree.mkdir()
        (work_tree / ".git").write_text(f"gitdir: {worktree_git}\n")

        assert read_revision(work_tree) == HEAD_SHA

    def test_broken_gitdir(self, temp_dir: Path) -> None:
        (temp_dir / ".git").write_text("gitdir: /nonexistent/dir\n")
        assert get_git_dir(temp_dir) is None
        assert read_revision(temp_dir) == ""

    def test_garbage_git_file(self, temp_dir: Path) -> None:
        (temp_dir / ".git").write_text("not a pointer\n")
        assert get_git_dir(temp_dir) is None


class TestGetRevision:
    """GitProtocol.get_revision runs no commands."""

    def test_reads_metadata(
        self, git_protocol: GitProtocol, make_git_dir: Callable[..., Path]
    ) -> None:
        work_tree = make_git_dir(refs={"refs/heads/main": HEAD_SHA})
        plugin = Plugin(repo="Shougo/dpp.vim", path=str(work_tree))
        assert git_protocol.get_revision(plugin) == HEAD_SHA

    def test_requires_repo(
        self, git_protocol: GitProtocol, make_git_dir: Callable[..., Path]
    ) -> None:
        work_tree = make_git_dir(refs={"refs/heads/main": HEAD_SHA})
        assert git_protocol.get_revision(Plugin(path=str(work_tree))) == ""
