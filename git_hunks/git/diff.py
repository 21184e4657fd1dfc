"""Resolve comparison requests into git diff invocations."""

import os

import click

from ..config import DEFAULT_CONTEXT_LINES, DEFAULT_TARGET, NULL_DEVICE, STAGED, WORKING
from ..exceptions import InvocationFailedError
from ..hunks import empty_result, parse_diff_to_hunks
from .core import check_git_repo, get_repo_root, run_git


def build_context_arg(context_lines=DEFAULT_CONTEXT_LINES):
    """Return the `-U<n>` argument for a context width."""
    if context_lines is None:
        context_lines = DEFAULT_CONTEXT_LINES
    if isinstance(context_lines, bool) or not isinstance(context_lines, int) or context_lines < 0:
        raise ValueError(f"context_lines must be a non-negative integer, got {context_lines!r}")
    return f"-U{context_lines}"


def resolve_diff_args(source=WORKING, target=DEFAULT_TARGET, context_lines=DEFAULT_CONTEXT_LINES):
    """
    Build the argv for the primary diff of a comparison.

    - staged: the index against `target` (plain `--staged` when target is HEAD)
    - working: the working tree against `target`
    - anything else is a ref: `source..target`, or `source..HEAD` when both
      sides name the same ref so the comparison is never trivially empty
    """
    source = source or WORKING
    target = target or DEFAULT_TARGET
    context_arg = build_context_arg(context_lines)

    if source == STAGED:
        if target != DEFAULT_TARGET:
            return ["diff", context_arg, "--staged", target]
        return ["diff", context_arg, "--staged"]

    if source == WORKING:
        return ["diff", context_arg, target]

    if source == target:
        return ["diff", context_arg, f"{source}..{DEFAULT_TARGET}"]
    return ["diff", context_arg, f"{source}..{target}"]



def get_untracked_files(directory, runner=None):
    """
    Get list of untracked files (excluding ignored files).

    Names are read NUL-separated so they arrive unquoted, relative to
    `directory`.
    """
    runner = runner or run_git
    try:
        out = runner(["ls-files", "-z", "--others", "--exclude-standard"], directory)
    except InvocationFailedError as exc:
        click.secho(f"Could not list untracked files: {exc.message}", fg="yellow", err=True)
        return []
    return [f for f in out.split("\0") if f.strip()]


def get_untracked_diff(directory, file_name, context_lines=DEFAULT_CONTEXT_LINES, runner=None):
    """
    Diff an untracked file against the null device so it shows as wholly added.

    `git diff --no-index` exits with 1 when the files differ, which is the
    normal case here.
    """
    runner = runner or run_git
    args = ["diff", "--no-index", build_context_arg(context_lines), NULL_DEVICE, file_name]
    return runner(args, directory, ok_codes=(0, 1))


def _collect_diff(root, diff_args, context_lines, include_untracked, is_default, runner):
    diff_text = runner(diff_args, root)

    if include_untracked:
        for untracked_file in get_untracked_files(root, runner=runner):
            try:
                untracked_text = get_untracked_diff(root, untracked_file, context_lines, runner=runner)
            except InvocationFailedError as exc:
                click.secho(
                    f"Skipping untracked file {untracked_file}: {exc.message}",
                    fg="yellow",
                    err=True,
                )
                continue

            if not untracked_text.strip():
                continue
            if diff_text.strip():
                diff_text += "\n"
            diff_text += untracked_text

    if not diff_text.strip() and is_default:
        # A default request comes back empty when everything is already staged.
        staged_text = runner(["diff", build_context_arg(context_lines), "--cached"], root)
        if staged_text.strip():
            return staged_text

    return diff_text


def _resolve_request(directory, context_lines, include_untracked, source, target, runner):
    """Validate, check the repository and collect the merged diff from its root."""
    runner = runner or run_git
    source = source or WORKING
    target = target or DEFAULT_TARGET
    diff_args = resolve_diff_args(source, target, context_lines)

    check_git_repo(directory, runner=runner)
    root = get_repo_root(directory, runner=runner)

    is_default = source == WORKING and target == DEFAULT_TARGET
    diff_text = _collect_diff(root, diff_args, context_lines, include_untracked, is_default, runner)
    return root, diff_text


def get_raw_diff(
    directory,
    context_lines=DEFAULT_CONTEXT_LINES,
    include_untracked=False,
    source=WORKING,
    target=DEFAULT_TARGET,
    runner=None,
):
    """
    Run every invocation a comparison needs and merge their output.

    Args:
        directory: Repository directory (any directory inside the work tree)
        context_lines: Lines of context around each change
        include_untracked: Append a diff for each untracked file
        source: "working", "staged", or a ref
        target: Ref to compare against

    Returns:
        Merged unified diff text ("" when there are no changes). All paths in
        it are relative to the repository root.

    Raises:
        NotARepositoryError: `directory` is not a repository; nothing else runs
        InvocationFailedError: the primary diff failed
    """
    _, diff_text = _resolve_request(directory, context_lines, include_untracked, source, target, runner)
    return diff_text


def get_git_diff(
    directory,
    context_lines=DEFAULT_CONTEXT_LINES,
    include_untracked=False,
    source=WORKING,
    target=DEFAULT_TARGET,
    runner=None,
    stat=os.stat,
):
    """
    Compare `source` against `target` and return the result as hunks.

    File metadata is looked up under the repository root, whichever
    directory inside the work tree was given. "No changes" is an empty
    result, not an error.
    """
    root, diff_text = _resolve_request(
        directory, context_lines, include_untracked, source, target, runner
    )
    if not diff_text.strip():
        return empty_result()
    return parse_diff_to_hunks(diff_text, root, stat=stat)
