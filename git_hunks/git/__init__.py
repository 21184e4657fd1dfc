"""Git utilities package."""

from .core import check_git_repo, get_repo_root, is_git_repo, run_git
from .diff import (
    build_context_arg,
    get_git_diff,
    get_raw_diff,
    get_untracked_diff,
    get_untracked_files,
    resolve_diff_args,
)
from .refs import get_branches, get_git_refs, get_recent_commits

__all__ = [
    "run_git",
    "is_git_repo",
    "check_git_repo",
    "get_repo_root",
    "build_context_arg",
    "resolve_diff_args",
    "get_untracked_files",
    "get_untracked_diff",
    "get_raw_diff",
    "get_git_diff",
    "get_branches",
    "get_recent_commits",
    "get_git_refs",
]
