"""Branch and recent-commit listings."""

import click

from ..config import RECENT_COMMIT_COUNT
from ..exceptions import InvocationFailedError
from .core import check_git_repo, run_git

LOCAL_PREFIX = "refs/heads/"
REMOTE_PREFIX = "refs/remotes/"


def _is_remote_head(refname):
    return refname.startswith(REMOTE_PREFIX) and refname.endswith("/HEAD")


def _short_ref_name(refname):
    for prefix in (LOCAL_PREFIX, REMOTE_PREFIX):
        if refname.startswith(prefix):
            return refname[len(prefix):]
    return refname


def get_branches(directory, runner=None):
    """List local and remote branches, skipping the remote HEAD pointer."""
    runner = runner or run_git
    out = runner(["branch", "-a", "--format=%(refname)"], directory)
    branches = []
    for line in out.splitlines():
        refname = line.strip()
        # Detached HEAD shows up as "(HEAD detached at ...)".
        if not refname or refname.startswith("(") or _is_remote_head(refname):
            continue
        branches.append(
            {
                "name": _short_ref_name(refname),
                "ref_type": "branch",
                "short_hash": None,
                "message": None,
            }
        )
    return branches


def get_recent_commits(directory, max_count=RECENT_COMMIT_COUNT, runner=None):
    """List the most recent commits as `<short hash> - <subject>` refs."""
    runner = runner or run_git
    out = runner(["log", f"-{max_count}", "--pretty=format:%h|%s"], directory)
    commits = []
    for line in out.splitlines():
        parts = line.split("|", 1)
        if len(parts) < 2:
            continue
        short_hash, subject = parts
        commits.append(
            {
                "name": f"{short_hash} - {subject}",
                "ref_type": "commit",
                "short_hash": short_hash,
                "message": subject,
            }
        )
    return commits


def get_git_refs(directory, max_count=RECENT_COMMIT_COUNT, runner=None):
    """
    List branches and recent commits for a repository.

    Returns:
        {"branches": [...], "recent_commits": [...]}

    Raises NotARepositoryError for a non-repository. A listing that fails
    (e.g. `git log` in a repository with no commits yet) is reported and
    left empty.
    """
    runner = runner or run_git
    check_git_repo(directory, runner=runner)

    refs = {"branches": [], "recent_commits": []}
    try:
        refs["branches"] = get_branches(directory, runner=runner)
    except InvocationFailedError as exc:
        click.secho(f"Could not list branches: {exc.message}", fg="yellow", err=True)

    try:
        refs["recent_commits"] = get_recent_commits(directory, max_count=max_count, runner=runner)
    except InvocationFailedError as exc:
        click.secho(f"Could not list commits: {exc.message}", fg="yellow", err=True)

    return refs
