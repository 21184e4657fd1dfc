"""Core git utilities and subprocess wrappers."""

import subprocess

from ..exceptions import InvocationFailedError, NotARepositoryError


def run_git(args, directory, ok_codes=(0,)):
    """
    Run `git <args>` inside `directory` and return its raw stdout.

    Output is not stripped: diff text keeps its trailing newline. Exit codes
    listed in `ok_codes` count as success (`diff --no-index` exits with 1 when
    the files differ).

    Raises InvocationFailedError if git cannot be started, exits with any
    other status, or exits non-zero with nothing on stdout but an error on
    stderr (e.g. `diff --no-index` on a path it cannot read).
    """
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=directory,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        raise InvocationFailedError(args, details=f"Failed to execute git command: {exc}") from exc

    stdout = result.stdout.decode("utf-8", errors="ignore")
    stderr = result.stderr.decode("utf-8", errors="ignore")
    if result.returncode not in ok_codes:
        raise InvocationFailedError(args, returncode=result.returncode, details=stderr)
    if result.returncode != 0 and not stdout.strip() and stderr.strip():
        raise InvocationFailedError(args, returncode=result.returncode, details=stderr)

    return stdout


def is_git_repo(directory, runner=None):
    """Check if `directory` is inside a git work tree."""
    runner = runner or run_git
    try:
        runner(["rev-parse", "--git-dir"], directory)
    except InvocationFailedError:
        return False
    return True


def check_git_repo(directory, runner=None):
    """Raise NotARepositoryError unless `directory` is a git repository."""
    runner = runner or run_git
    try:
        runner(["rev-parse", "--git-dir"], directory)
    except InvocationFailedError as exc:
        raise NotARepositoryError(directory, details=exc.details) from exc


def get_repo_root(directory, runner=None):
    """Return the top-level directory of the work tree containing `directory`."""
    runner = runner or run_git
    return runner(["rev-parse", "--show-toplevel"], directory).strip()
