"""CLI commands for plugrepo.

The commands only print the plans the resolver builds; nothing is run
except the read-only inspections the planner itself needs.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from plugrepo.host import LocalHost
from plugrepo.models.command import CommandPlan
from plugrepo.models.config import GitConfig, load_config
from plugrepo.models.plugin import Plugin
from plugrepo.resolver import Resolver

console = Console()
logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _plugin(ctx: click.Context, repo: str, rev: str | None = None, path: str | None = None) -> Plugin:
    """Build a plugin record and fill in its path the way the host would."""
    resolver: Resolver = ctx.obj["resolver"]
    params: GitConfig = ctx.obj["params"]

    plugin = Plugin(name=repo.rstrip("/").split("/")[-1], repo=repo, rev=rev, path=path)
    update = resolver.detect(plugin, params)
    if update is None:
        return plugin
    if path:
        # An explicit path overrides the canonical one
        update = update.model_copy(update={"path": path})
    return update.apply(plugin)


def _print_plan(title: str, plan: CommandPlan) -> None:
    if not plan:
        console.print(f"[red]{title}: nothing to do (repository could not be resolved)[/red]")
        raise SystemExit(1)

    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Command", style="cyan")
    for i, command in enumerate(plan, 1):
        table.add_row(str(i), command.display())
    console.print(table)


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with git parameters",
)
@click.option("--base-path", default="~/.cache/dpp", help="Base directory for repositories")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, base_path: str, verbose: bool) -> None:
    """plugrepo - resolve plugin repositories and plan git commands."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    try:
        ctx.obj["params"] = load_config(config_path)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    host = LocalHost(base_path)
    ctx.obj["host"] = host
    ctx.obj["resolver"] = Resolver(host)


@main.command()
@click.argument("repo")
@click.pass_context
def url(ctx: click.Context, repo: str) -> None:
    """Print the clone URL of REPO."""
    resolver: Resolver = ctx.obj["resolver"]
    result = resolver.backend.get_url(Plugin(repo=repo), ctx.obj["params"])
    if not result:
        logger.warning(f"Cannot resolve {repo}")
        console.print(f"[red]Cannot build a URL for {repo}[/red]")
        raise SystemExit(1)
    console.print(result)


@main.command()
@click.argument("repo")
@click.pass_context
def detect(ctx: click.Context, repo: str) -> None:
    """Show the path and URL detected for REPO."""
    resolver: Resolver = ctx.obj["resolver"]
    update = resolver.detect(Plugin(repo=repo), ctx.obj["params"])
    if update is None:
        console.print(f"[yellow]{repo} is used as-is (raw URL, local or unresolvable)[/yellow]")
        return

    table = Table(title=f"Detected: {repo}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for field, value in update.changes().items():
        table.add_row(field, str(value))
    console.print(table)


@main.command()
@click.argument("repo")
@click.option("--rev", "-r", default=None, help="Requested revision")
@click.option("--path", "-p", default=None, help="Override the working tree path")
@click.pass_context
def sync(ctx: click.Context, repo: str, rev: str | None, path: str | None) -> None:
    """Show the clone or update commands for REPO."""
    resolver: Resolver = ctx.obj["resolver"]
    plugin = _plugin(ctx, repo, rev, path)
    _print_plan(f"Sync: {repo}", resolver.get_sync_commands(plugin, ctx.obj["params"]))


@main.command()
@click.argument("repo")
@click.argument("rev")
@click.option("--path", "-p", default=None, help="Override the working tree path")
@click.pass_context
def rollback(ctx: click.Context, repo: str, rev: str, path: str | None) -> None:
    """Show the commands resetting REPO to REV."""
    resolver: Resolver = ctx.obj["resolver"]
    plugin = _plugin(ctx, repo, path=path)
    _print_plan(f"Rollback: {repo}", resolver.get_rollback_commands(plugin, rev, ctx.obj["params"]))


@main.command()
@click.argument("repo")
@click.argument("old_rev")
@click.argument("new_rev")
@click.option("--path", "-p", default=None, help="Override the working tree path")
@click.pass_context
def diff(ctx: click.Context, repo: str, old_rev: str, new_rev: str, path: str | None) -> None:
    """Show the documentation diff command between two revisions."""
    resolver: Resolver = ctx.obj["resolver"]
    plugin = _plugin(ctx, repo, path=path)
    _print_plan(
        f"Diff: {repo}",
        resolver.get_diff_commands(plugin, old_rev, new_rev, ctx.obj["params"]),
    )


@main.command()
@click.argument("repo")
@click.argument("old_rev")
@click.argument("new_rev")
@click.option("--path", "-p", default=None, help="Override the working tree path")
@click.pass_context
def count(ctx: click.Context, repo: str, old_rev: str, new_rev: str, path: str | None) -> None:
    """Show the command counting commits between two revisions."""
    resolver: Resolver = ctx.obj["resolver"]
    plugin = _plugin(ctx, repo, path=path)
    _print_plan(
        f"Changes: {repo}",
        resolver.get_changes_count_commands(plugin, old_rev, new_rev, ctx.obj["params"]),
    )


@main.command()
@click.argument("repo")
@click.argument("old_rev")
@click.argument("new_rev")
@click.option("--path", "-p", default=None, help="Override the working tree path")
@click.pass_context
def log(ctx: click.Context, repo: str, old_rev: str, new_rev: str, path: str | None) -> None:
    """Show the log command between two revisions."""
    resolver: Resolver = ctx.obj["resolver"]
    plugin = _plugin(ctx, repo, path=path)

    async def run() -> CommandPlan:
        return await resolver.get_log_commands(plugin, old_rev, new_rev, ctx.obj["params"])

    _print_plan(f"Log: {repo}", asyncio.run(run()))


@main.command()
@click.argument("repo")
@click.option("--rev", "-r", default=None, help="Revision or tag pattern (e.g. 'v*')")
@click.option("--path", "-p", default=None, help="Override the working tree path")
@click.pass_context
def lock(ctx: click.Context, repo: str, rev: str | None, path: str | None) -> None:
    """Show the checkout command pinning REPO to a revision."""
    resolver: Resolver = ctx.obj["resolver"]
    plugin = _plugin(ctx, repo, rev, path)

    async def run() -> CommandPlan:
        return await resolver.get_revision_lock_commands(plugin, ctx.obj["params"])

    _print_plan(f"Lock: {repo}", asyncio.run(run()))


@main.command()
@click.argument("repo")
@click.option("--path", "-p", default=None, help="Override the working tree path")
@click.pass_context
def revision(ctx: click.Context, repo: str, path: str | None) -> None:
    """Print the revision checked out for REPO."""
    resolver: Resolver = ctx.obj["resolver"]
    plugin = _plugin(ctx, repo, path=path)
    rev = resolver.get_revision(plugin)
    if not rev:
        console.print(f"[red]No revision found for {repo}[/red]")
        raise SystemExit(1)
    console.print(rev)


if __name__ == "__main__":
    main()
