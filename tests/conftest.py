import subprocess
from pathlib import Path
from types import SimpleNamespace

import pytest

from git_hunks.exceptions import InvocationFailedError


@pytest.fixture
def tmp_git_repo(tmp_path):
    """Create a temporary git repository on `main` with user config set."""
    repo = tmp_path / "repo"
    repo.mkdir()

    def git(cmd):
        subprocess.check_call(f"git -C {repo} {cmd}", shell=True)

    git("init -q")
    git("symbolic-ref HEAD refs/heads/main")
    git('config user.email "test@example.com"')
    git('config user.name "Test User"')
    git("config commit.gpgsign false")
    return repo, git


@pytest.fixture
def write_file():
    def _write(base: Path, name: str, content: str = "sample"):
        path = base / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


class FakeRunner:
    """Stands in for `run_git`: canned output per argv, and a call log."""

    def __init__(self, responses=None, failures=None):
        self.responses = responses or {}
        self.failures = failures or {}
        self.calls = []

    def __call__(self, args, directory, ok_codes=(0,)):
        key = tuple(args)
        self.calls.append(key)
        if key in self.failures:
            raise InvocationFailedError(args, returncode=128, details=self.failures[key])
        if key == ("rev-parse", "--show-toplevel") and key not in self.responses:
            return f"{directory}\n"
        return self.responses.get(key, "")


@pytest.fixture
def fake_runner():
    return FakeRunner


@pytest.fixture
def fake_stat():
    """An os.stat stand-in backed by a {path: (size, mtime)} dict."""

    def _make(files):
        def _stat(path):
            if path not in files:
                raise FileNotFoundError(path)
            size, mtime = files[path]
            return SimpleNamespace(st_size=size, st_mtime=mtime)

        return _stat

    return _make
