"""Open files from a diff in a locally installed editor."""

import os
import shlex
import subprocess
import sys

from .config import get_editor_override
from .exceptions import EditorError, EditorNotFoundError

IS_WINDOWS = sys.platform.startswith("win")


def _vscode_args(path, line):
    if line:
        return ["-r", "-g", f"{path}:{line}"]
    return ["-r", path]


def _path_colon_line_args(path, line):
    return [f"{path}:{line}"] if line else [path]


def _notepad_plus_plus_args(path, line):
    return [f"-n{line}", path] if line else [path]


def _path_only_args(path, line):
    return [path]


# (command prefix, check args, launch args builder, windows only), tried in order.
EDITORS = [
    (["code.cmd"], ["--version"], _vscode_args, True),
    (["code.exe"], ["--version"], _vscode_args, True),
    (["code"], ["--version"], _vscode_args, False),
    (["cmd", "/c", "code"], ["--version"], _vscode_args, True),
    (["subl"], ["--version"], _path_colon_line_args, False),
    (["atom"], ["--version"], _path_colon_line_args, False),
    (["notepad++"], ["--version"], _notepad_plus_plus_args, True),
    (["notepad"], ["/?"], _path_only_args, True),
]


def run_command(cmd):
    """Run a command, returning its exit status and combined output."""
    result = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    return result.returncode, result.stdout.decode("utf-8", errors="ignore")


def check_editor_available(cmd, runner=None):
    """Return True if `cmd` starts and exits with status 0."""
    runner = runner or run_command
    try:
        returncode, _ = runner(cmd)
    except OSError:
        return False
    return returncode == 0


def find_available_editor(runner=None, windows=IS_WINDOWS):
    """
    Return the first entry of EDITORS whose availability check succeeds.

    Raises EditorNotFoundError if none does.
    """
    for entry in EDITORS:
        prefix, check_args, _, windows_only = entry
        if windows_only and not windows:
            continue
        if check_editor_available([*prefix, *check_args], runner=runner):
            return entry
    raise EditorNotFoundError()


def build_editor_command(entry, file_path, line_number=None):
    prefix, _, build_args, _ = entry
    return [*prefix, *build_args(file_path, line_number)]


def resolve_file_path(file_path, working_directory):
    if os.path.isabs(file_path):
        return file_path
    return os.path.join(working_directory, file_path)


def open_file_in_editor(file_path, working_directory, line_number=None, runner=None, windows=IS_WINDOWS):
    """
    Open a (possibly repository-relative) file, at a line if given.

    GIT_HUNKS_EDITOR, when set, is used as-is with the path appended and no
    probing. Otherwise the first available editor in EDITORS is used.
    """
    runner = runner or run_command
    absolute_path = resolve_file_path(file_path, working_directory)

    override = get_editor_override()
    if override:
        cmd = [*shlex.split(override), absolute_path]
    else:
        entry = find_available_editor(runner=runner, windows=windows)
        cmd = build_editor_command(entry, absolute_path, line_number)

    try:
        returncode, output = runner(cmd)
    except OSError as exc:
        raise EditorError(f"Failed to execute editor command: {exc}") from exc

    if returncode != 0:
        raise EditorError(f"Editor command failed: {output.strip()}", details=output)
    return cmd
