"""Configuration constants and settings for git-hunks."""

import os

__version__ = "0.1.0"

# Comparison sources that are not refs.
WORKING = "working"
STAGED = "staged"

DEFAULT_TARGET = "HEAD"
DEFAULT_CONTEXT_LINES = 3
RECENT_COMMIT_COUNT = 20

# Passed to `git diff --no-index` as the "before" side of an untracked file.
NULL_DEVICE = os.devnull
# What git writes in ---/+++ headers for a missing side, on every platform.
DIFF_NULL_PATH = "/dev/null"

FILE_HEADER_MARKER = "diff --git"
HUNK_MARKER = "@@"
NO_NEWLINE_MARKER = "\\ No newline at end of file"

UNKNOWN_FILE = "Unknown file"
UNKNOWN_MODIFIED = "unknown"

EDITOR_ENV_VAR = "GIT_HUNKS_EDITOR"


def get_editor_override():
    """Return the editor command line from GIT_HUNKS_EDITOR, or None."""
    value = os.environ.get(EDITOR_ENV_VAR, "").strip()
    return value or None
