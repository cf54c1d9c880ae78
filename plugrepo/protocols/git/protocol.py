"""Git protocol backend: local detection and command planning."""

from __future__ import annotations

import logging
from pathlib import Path

from plugrepo.host import Host
from plugrepo.models.command import Command, CommandPlan
from plugrepo.models.config import GitConfig
from plugrepo.models.plugin import Plugin, PluginUpdate
from plugrepo.process import run_inspection, working_dir
from plugrepo.protocols.git.revision import read_revision
from plugrepo.protocols.git.url import (
    browse_url,
    get_git_url,
    is_local_path,
    is_raw_url,
    repository_path,
)

logger = logging.getLogger(__name__)

DIFF_PATHS = ["doc", "README", "README.md"]
LOG_FORMAT = "--pretty=format:%h [%cr] %s"


def _is_applicable(plugin: Plugin) -> bool:
    return bool(plugin.repo) and bool(plugin.path)


class GitProtocol:
    """Git backend for the plugin manager.

    Holds no state besides the host; every call takes the current
    :class:`GitConfig` so the host may change it between calls.
    """

    name = "git"

    def __init__(self, host: Host) -> None:
        self.host = host

    def default_params(self) -> GitConfig:
        return GitConfig()

    def detect(self, plugin: Plugin, params: GitConfig) -> PluginUpdate | None:
        """Resolve the working tree path and browse URL of ``plugin``.

        Local directories short-circuit URL resolution and are frozen.
        """
        repo = plugin.repo
        if not repo:
            return None

        if is_raw_url(repo):
            return None

        if is_local_path(repo):
            if plugin.local:
                return None

            path = self.host.expand(repo)
            if Path(path).is_dir():
                logger.info(f"Using local repository {path}")
                return PluginUpdate(local=True, frozen=True, path=path)

        url = self.get_url(plugin, params)
        if not url:
            return None

        return PluginUpdate(
            path=repository_path(self.host.base_path(), url),
            url=browse_url(url),
        )

    def get_url(self, plugin: Plugin, params: GitConfig) -> str:
        if not plugin.repo:
            return ""
        return get_git_url(
            plugin.repo,
            params.default_hub_site,
            params.default_protocol,
            on_invalid_protocol=self._report_invalid_protocol,
        )

    def _report_invalid_protocol(self, protocol: str) -> None:
        self.host.error(f'Invalid git protocol: "{protocol}"')

    def _command(self, params: GitConfig, args: list[str]) -> Command:
        return Command(command=params.command_path, args=args)

    def _init_args(self, params: GitConfig) -> list[str]:
        """Config overrides placed before the subcommand of network operations."""
        args: list[str] = []
        if not params.enable_credential_helper:
            args += ["-c", "credential.helper=", "-c", "core.fsmonitor=false"]
        if not params.enable_ssl_verify:
            args += ["-c", "http.sslVerify=false"]
        return args

    def get_sync_commands(self, plugin: Plugin, params: GitConfig) -> CommandPlan:
        """Clone when the working tree is absent, otherwise update it."""
        if not _is_applicable(plugin):
            return []

        init_args = self._init_args(params)

        if Path(plugin.path).is_dir():
            commands = [self._command(params, [*init_args, "fetch"])]

            # Shallow histories do not support "remote set-head -a" reliably
            if not params.is_shallow:
                remote = plugin.git_attrs.git_remote or params.default_remote
                commands.append(self._command(params, ["remote", "set-head", remote, "-a"]))

            commands.append(self._command(params, list(params.pull_args)))
            commands.append(
                self._command(params, ["submodule", "update", "--init", "--recursive"])
            )
            return commands

        url = self.get_url(plugin, params)
        if not url:
            return []

        args = [*init_args, "clone", "--recursive"]
        if params.enable_partial_clone:
            args.append("--filter=blob:none")
        if params.is_shallow:
            args.append(f"--depth={params.clone_depth}")
            # A shallow clone cannot be pinned later, so pin it now
            if plugin.rev:
                args += ["--branch", plugin.rev]
        args += [url, plugin.path]

        return [self._command(params, args)]

    def get_rollback_commands(self, plugin: Plugin, params: GitConfig, rev: str) -> CommandPlan:
        if not _is_applicable(plugin):
            return []
        return [self._command(params, ["reset", "--hard", rev])]

    def get_diff_commands(
        self, plugin: Plugin, params: GitConfig, old_rev: str, new_rev: str
    ) -> CommandPlan:
        """Documentation-only diff shown to the user after an update."""
        if not _is_applicable(plugin):
            return []
        return [self._command(params, ["diff", f"{old_rev}..{new_rev}", "--", *DIFF_PATHS])]

    def get_changes_count_commands(
        self, plugin: Plugin, params: GitConfig, old_rev: str, new_rev: str
    ) -> CommandPlan:
        if not _is_applicable(plugin):
            return []
        return [self._command(params, ["rev-list", "--count", f"{old_rev}..{new_rev}"])]

    async def get_log_commands(
        self, plugin: Plugin, params: GitConfig, old_rev: str, new_rev: str
    ) -> CommandPlan:
        """Log of the commits between two revisions.

        ``old^`` is only used when ``old`` is not an ancestor of ``new``;
        otherwise the commit shown after the previous update would be shown
        again.
        """
        if not _is_applicable(plugin) or not old_rev or not new_rev:
            return []

        result = await run_inspection(
            [params.command_path, "merge-base", old_rev, new_rev],
            cwd=working_dir(plugin.path),
        )
        is_ancestor = result.ok and result.stdout.strip() == old_rev
        log_range = f"{old_rev}..{new_rev}" if is_ancestor else f"{old_rev}^..{new_rev}"

        return [
            self._command(
                params,
                ["log", log_range, "--graph", "--no-show-signature", LOG_FORMAT],
            )
        ]

    async def get_revision_lock_commands(self, plugin: Plugin, params: GitConfig) -> CommandPlan:
        """Check out the requested revision.

        Wildcard revisions select the newest matching tag. Without a
        revision the current branch is kept, falling back to the default
        branch when HEAD is detached.
        """
        if not _is_applicable(plugin):
            return []

        cwd = working_dir(plugin.path)
        rev = plugin.rev or ""

        if "*" in rev:
            result = await run_inspection(
                [params.command_path, "tag", rev, "--list", "--sort", "-version:refname"],
                cwd=cwd,
            )
            rev = result.first_line if result.ok else ""
            if not rev:
                logger.debug(f"No tag matches {plugin.rev!r} in {plugin.path}")

        if not rev:
            result = await run_inspection(
                [params.command_path, "symbolic-ref", "--short", "HEAD"],
                cwd=cwd,
            )
            rev = result.first_line if result.ok else ""
            if not rev or rev.startswith("fatal: "):
                rev = plugin.git_attrs.git_default_branch or params.default_branch

        return [self._command(params, ["checkout", "--quiet", "--guess", rev, "--"])]

    def get_revision(self, plugin: Plugin) -> str:
        """Read the current revision without running git."""
        if not _is_applicable(plugin):
            return ""
        return read_revision(plugin.path)
