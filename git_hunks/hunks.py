"""Parse unified diff text into per-file hunks with line statistics."""

import os
import re

from .config import (
    DIFF_NULL_PATH,
    FILE_HEADER_MARKER,
    HUNK_MARKER,
    NO_NEWLINE_MARKER,
    UNKNOWN_FILE,
)
from .metadata import file_stats_for

FILE_HEADER_RE = re.compile(r"^" + re.escape(FILE_HEADER_MARKER), flags=re.MULTILINE)
HUNK_HEADER_RE = re.compile(r"^(@@[^@]*@@)")
HUNK_RANGE_RE = re.compile(r"@@ -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@")

C_ESCAPES = {"a": "\a", "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v"}


def empty_result():
    return {"hunks": [], "total_stats": {"added": 0, "removed": 0, "files": 0}}


def split_file_segments(diff_output):
    """
    Split diff text into one list of lines per file.

    The `diff --git` marker line is consumed by the split; whatever precedes
    the first marker is discarded.
    """
    segments = []
    for block in FILE_HEADER_RE.split(diff_output)[1:]:
        lines = [line[:-1] if line.endswith("\r") else line for line in block.split("\n")]
        # Trailing newlines (and the separators between merged diffs) are not diff lines.
        while lines and not lines[-1]:
            lines.pop()
        segments.append(lines)
    return segments


def unquote_path(quoted):
    """
    Decode a C-style quoted path as git prints it (core.quotePath).

    `"caf\\303\\251.txt"` becomes `café.txt`.
    """
    inner = quoted[1:-1]
    out = bytearray()
    i = 0
    while i < len(inner):
        ch = inner[i]
        if ch != "\\" or i + 1 == len(inner):
            out.extend(ch.encode("utf-8"))
            i += 1
            continue
        nxt = inner[i + 1]
        octal = inner[i + 1:i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
            continue
        out.extend(C_ESCAPES.get(nxt, nxt).encode("utf-8"))
        i += 2
    return out.decode("utf-8", errors="replace")


def _strip_path(path, prefix):
    path = path.rstrip("\t")
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        path = unquote_path(path)
    if path.startswith(prefix):
        path = path[len(prefix):]
    return path


def extract_file_name(lines):
    """
    Pick the file name for a segment from its `+++`/`---` lines.

    The new side wins unless it is /dev/null (a deletion); a segment where
    both sides are missing is "Unknown file".
    """
    header_lines = []
    for line in lines:
        if line.startswith(HUNK_MARKER):
            break
        header_lines.append(line)

    plus_line = next((line for line in header_lines if line.startswith("+++ ")), None)
    minus_line = next((line for line in header_lines if line.startswith("--- ")), None)

    for line, prefix in ((plus_line, "b/"), (minus_line, "a/")):
        if line is None:
            continue
        path = _strip_path(line[4:], prefix)
        if path != DIFF_NULL_PATH:
            return path
    return UNKNOWN_FILE


def file_extension(file_name):
    """Return the extension without the dot, or "" (dotfiles have none)."""
    return os.path.splitext(os.path.basename(file_name))[1][1:]


def trim_hunk_header(line):
    """Keep only the `@@ ... @@` span, dropping trailing function context."""
    m = HUNK_HEADER_RE.match(line)
    return m.group(1) if m else line


def parse_hunk_header(header):
    """Return the old/new start lines of a hunk header (1/1 if unparsable)."""
    m = HUNK_RANGE_RE.search(header)
    if not m:
        return {"old_start": 1, "new_start": 1}
    return {"old_start": int(m.group(1)), "new_start": int(m.group(2))}


def _iter_hunks(lines):
    """Yield `(header, body)` pairs for every hunk in a file segment."""
    i = 0
    while i < len(lines):
        if not lines[i].startswith(HUNK_MARKER):
            i += 1
            continue

        header = trim_hunk_header(lines[i])
        body = []
        i += 1
        while i < len(lines) and not lines[i].startswith(HUNK_MARKER):
            if not lines[i].startswith(NO_NEWLINE_MARKER):
                body.append(lines[i])
            i += 1
        yield header, body


def compute_total_stats(hunks):
    """Sum added/removed lines and count distinct file names."""
    return {
        "added": sum(h["stats"]["added"] for h in hunks),
        "removed": sum(h["stats"]["removed"] for h in hunks),
        "files": len({h["file_name"] for h in hunks}),
    }


def parse_diff_to_hunks(diff_output, base_path, stat=os.stat):
    """
    Convert unified diff text into a diff result dict.

    Args:
        diff_output: Raw (possibly merged) `git diff` output
        base_path: Repository directory, used only for file metadata
        stat: os.stat-compatible callable used for size/mtime lookups

    Returns:
        {"hunks": [...], "total_stats": {"added", "removed", "files"}}

    Never raises on malformed input: unrecognized structure yields an
    "Unknown file" name or zero hunks.
    """
    if not diff_output or not diff_output.strip():
        return empty_result()

    hunks = []
    for lines in split_file_segments(diff_output):
        file_name = extract_file_name(lines)
        file_ext = file_extension(file_name)
        size, modified = file_stats_for(base_path, file_name, stat=stat)

        for index, (header, body) in enumerate(_iter_hunks(lines)):
            hunks.append(
                {
                    "file_name": file_name,
                    "file_ext": file_ext,
                    "hunk_header": header,
                    "hunk_lines": body,
                    "hunk_id": f"{file_name}-{index}",
                    "stats": {
                        "added": sum(1 for line in body if line.startswith("+")),
                        "removed": sum(1 for line in body if line.startswith("-")),
                        "size": size,
                        "modified": modified,
                    },
                }
            )

    return {"hunks": hunks, "total_stats": compute_total_stats(hunks)}
