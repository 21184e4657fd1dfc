"""Display utilities and UI helpers."""

from datetime import datetime, timezone

import click

from .config import UNKNOWN_MODIFIED
from .hunks import parse_hunk_header

# (unit, seconds per unit, bucket ceiling in that unit)
RELATIVE_UNITS = [
    ("minute", 60, 60),
    ("hour", 60 * 60, 24),
    ("day", 24 * 60 * 60, 7),
    ("week", 7 * 24 * 60 * 60, 4),
    ("month", 30 * 24 * 60 * 60, 12),
]
YEAR_SECONDS = 365 * 24 * 60 * 60


def _plural(count, unit):
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_relative_time(iso_string, now=None):
    """Format an ISO timestamp as e.g. "3 minutes ago"."""
    if not iso_string or iso_string == UNKNOWN_MODIFIED:
        return UNKNOWN_MODIFIED
    try:
        modified = datetime.fromisoformat(iso_string)
    except ValueError:
        return UNKNOWN_MODIFIED
    if modified.tzinfo is None:
        modified = modified.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    delta = int((now - modified).total_seconds())
    seconds = abs(delta)
    if seconds < 60:
        return "just now"

    text = _plural(max(seconds // YEAR_SECONDS, 1), "year")
    for unit, unit_seconds, ceiling in RELATIVE_UNITS:
        count = seconds // unit_seconds
        if count < ceiling:
            # Month and year buckets round down to 0 just below their first whole unit.
            text = _plural(max(count, 1), unit)
            break
    return f"{text} ago" if delta > 0 else f"in {text}"


def format_local_time(iso_string):
    """Format an ISO timestamp in the local timezone."""
    if not iso_string or iso_string == UNKNOWN_MODIFIED:
        return "Unknown"
    try:
        modified = datetime.fromisoformat(iso_string)
    except ValueError:
        return "Unknown"
    return modified.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_size(size):
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def format_hunk(hunk, now=None, absolute_times=False):
    """
    Render a hunk as styled lines: location, stats, header, then body.

    The modification time is relative ("3 minutes ago") unless
    `absolute_times` asks for a local timestamp.
    """
    stats = hunk["stats"]
    if absolute_times:
        modified = format_local_time(stats["modified"])
    else:
        modified = format_relative_time(stats["modified"], now=now)
    start = parse_hunk_header(hunk["hunk_header"])["new_start"]
    lines = [
        click.style(f"{hunk['file_name']}:{start}", fg="cyan", bold=True)
        + click.style(f"  +{stats['added']} -{stats['removed']}", fg="white")
        + click.style(
            f"  {format_size(stats['size'])}, modified {modified}",
            dim=True,
        ),
        click.style(hunk["hunk_header"], fg="magenta"),
    ]
    for line in hunk["hunk_lines"]:
        if line.startswith("+"):
            lines.append(click.style(line, fg="green"))
        elif line.startswith("-"):
            lines.append(click.style(line, fg="red"))
        else:
            lines.append(line)
    return "\n".join(lines)


def format_summary(total_stats):
    """Format the totals line of a diff result."""
    files = total_stats["files"]
    return (
        f"{_plural(files, 'file')} changed, "
        f"{total_stats['added']} insertions(+), {total_stats['removed']} deletions(-)"
    )
