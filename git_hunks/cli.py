"""CLI commands and entry point."""

import json

import click

from .config import DEFAULT_CONTEXT_LINES, DEFAULT_TARGET, RECENT_COMMIT_COUNT, WORKING, __version__
from .editor import open_file_in_editor
from .exceptions import GitHunksError
from .git import get_git_diff, get_git_refs
from .ui import format_hunk, format_summary


def _fail(exc):
    click.secho(str(exc), fg="red", err=True)
    raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
def cli():
    """git-hunks: browse pending changes as hunks."""
    pass


@cli.command()
@click.argument("directory", required=False, default=".", type=click.Path(file_okay=False))
@click.option(
    "--source",
    default=WORKING,
    show_default=True,
    help='What to compare: "working", "staged", or a ref',
)
@click.option("--target", default=DEFAULT_TARGET, show_default=True, help="Ref to compare against")
@click.option(
    "-U",
    "--context",
    "context_lines",
    default=DEFAULT_CONTEXT_LINES,
    show_default=True,
    type=click.IntRange(min=0),
    help="Lines of context around each change",
)
@click.option("--untracked", is_flag=True, help="Include untracked files")
@click.option("--absolute-times", is_flag=True, help="Show modification times as local timestamps")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def diff(directory, source, target, context_lines, untracked, absolute_times, as_json):
    """Show pending changes as hunks."""
    try:
        result = get_git_diff(
            directory,
            context_lines=context_lines,
            include_untracked=untracked,
            source=source,
            target=target,
        )
    except GitHunksError as exc:
        _fail(exc)

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    if not result["hunks"]:
        click.echo("No changes found")
        return

    for hunk in result["hunks"]:
        click.echo(format_hunk(hunk, absolute_times=absolute_times))
        click.echo()
    click.secho(format_summary(result["total_stats"]), bold=True)


@cli.command()
@click.argument("directory", required=False, default=".", type=click.Path(file_okay=False))
@click.option(
    "--max-count",
    default=RECENT_COMMIT_COUNT,
    show_default=True,
    type=click.IntRange(min=1),
    help="How many recent commits to list",
)
@click.option("--json", "as_json", is_flag=True, help="Print the refs as JSON")
def refs(directory, max_count, as_json):
    """List branches and recent commits."""
    try:
        git_refs = get_git_refs(directory, max_count=max_count)
    except GitHunksError as exc:
        _fail(exc)

    if as_json:
        click.echo(json.dumps(git_refs, indent=2))
        return

    click.secho("Branches:", fg="cyan", bold=True)
    for ref in git_refs["branches"]:
        click.echo(f"  {ref['name']}")
    if not git_refs["branches"]:
        click.echo("  (none)")

    click.secho("\nRecent commits:", fg="cyan", bold=True)
    for ref in git_refs["recent_commits"]:
        click.echo(f"  {click.style(ref['short_hash'], fg='yellow')} {ref['message']}")
    if not git_refs["recent_commits"]:
        click.echo("  (none)")


@cli.command(name="open")
@click.argument("file_path")
@click.option("--line", "line_number", type=click.IntRange(min=1), help="Line to jump to")
@click.option(
    "--directory",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory relative paths are resolved against",
)
def open_(file_path, line_number, directory):
    """Open a file in the first available editor."""
    try:
        open_file_in_editor(file_path, directory, line_number=line_number)
    except GitHunksError as exc:
        _fail(exc)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
