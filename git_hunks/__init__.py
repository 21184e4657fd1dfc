"""git-hunks: turn pending git changes into addressable hunks."""

# Re-export the public API for library-style usage (and tests).
from .cli import cli, main
from .config import STAGED, WORKING, __version__
from .editor import find_available_editor, open_file_in_editor
from .exceptions import (
    EditorError,
    EditorNotFoundError,
    GitHunksError,
    InvocationFailedError,
    NotARepositoryError,
)
from .git import (
    check_git_repo,
    get_git_diff,
    get_git_refs,
    get_raw_diff,
    get_untracked_files,
    is_git_repo,
    resolve_diff_args,
    run_git,
)
from .hunks import compute_total_stats, parse_diff_to_hunks, parse_hunk_header
from .metadata import get_file_stats
from .ui import format_hunk, format_relative_time, format_summary

__all__ = [
    "__version__",
    "WORKING",
    "STAGED",
    # CLI
    "cli",
    "main",
    # Git
    "run_git",
    "is_git_repo",
    "check_git_repo",
    "resolve_diff_args",
    "get_untracked_files",
    "get_raw_diff",
    "get_git_diff",
    "get_git_refs",
    # Parsing
    "parse_diff_to_hunks",
    "parse_hunk_header",
    "compute_total_stats",
    "get_file_stats",
    # Editor
    "find_available_editor",
    "open_file_in_editor",
    # UI
    "format_hunk",
    "format_relative_time",
    "format_summary",
    # Errors
    "GitHunksError",
    "NotARepositoryError",
    "InvocationFailedError",
    "EditorNotFoundError",
    "EditorError",
]
