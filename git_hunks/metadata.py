"""File size and modification time lookups for diff hunks."""

import os
from datetime import datetime, timezone

from .config import UNKNOWN_MODIFIED


def get_file_stats(file_path, stat=os.stat):
    """
    Return `(size_bytes, modified)` for a file.

    `modified` is an ISO-8601 UTC timestamp truncated to whole seconds. Any
    lookup failure (missing file, permission error, bad path) yields
    `(0, "unknown")`: metadata is advisory and never fails a diff.
    """
    try:
        st = stat(file_path)
    except (OSError, ValueError):
        return 0, UNKNOWN_MODIFIED

    try:
        modified = datetime.fromtimestamp(int(st.st_mtime), tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        modified = UNKNOWN_MODIFIED
    return st.st_size, modified


def file_stats_for(base_path, file_name, stat=os.stat):
    """Look up stats for a repository-relative file name under `base_path`."""
    return get_file_stats(os.path.join(base_path, file_name), stat=stat)
