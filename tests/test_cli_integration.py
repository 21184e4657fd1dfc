import json
import os

import pytest
from click.testing import CliRunner

import git_hunks as gh


def invoke(*args):
    return CliRunner().invoke(gh.cli, list(args))


def commit_file(repo, git, write_file, name, content, message):
    write_file(repo, name, content)
    git(f"add {name}")
    git(f'commit -q -m "{message}"')


def test_diff_json_for_working_tree_change(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "x.txt", "line1\nline3\n", "feat: add x")
    write_file(repo, "x.txt", "line1\nline2\n")

    result = invoke("diff", str(repo), "--json")

    assert result.exit_code == 0
    parsed = json.loads(result.output)
    assert len(parsed["hunks"]) == 1
    hunk = parsed["hunks"][0]
    assert hunk["file_name"] == "x.txt"
    assert hunk["hunk_id"] == "x.txt-0"
    assert hunk["stats"]["added"] == 1
    assert hunk["stats"]["removed"] == 1
    assert hunk["stats"]["size"] == len("line1\nline2\n")
    assert hunk["stats"]["modified"] != "unknown"
    assert parsed["total_stats"] == {"added": 1, "removed": 1, "files": 1}


def test_default_diff_shows_staged_changes(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "a.py", "x = 1\n", "feat: add a")
    write_file(repo, "a.py", "x = 2\n")
    git("add a.py")

    parsed = json.loads(invoke("diff", str(repo), "--json").output)

    assert [h["file_name"] for h in parsed["hunks"]] == ["a.py"]
    assert parsed["hunks"][0]["hunk_lines"] == ["-x = 1", "+x = 2"]


def test_untracked_file_is_merged_after_tracked(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "a.txt", "one\n", "feat: add a")
    write_file(repo, "a.txt", "two\n")
    write_file(repo, "new.txt", "hello")

    parsed = json.loads(invoke("diff", str(repo), "--untracked", "--json").output)

    assert [h["file_name"] for h in parsed["hunks"]] == ["a.txt", "new.txt"]
    new_hunk = parsed["hunks"][1]
    assert new_hunk["hunk_lines"] == ["+hello"]
    assert (new_hunk["stats"]["added"], new_hunk["stats"]["removed"]) == (1, 0)
    assert parsed["total_stats"]["files"] == 2


def test_untracked_ignored_without_flag(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "a.txt", "one\n", "feat: add a")
    write_file(repo, "new.txt", "hello")

    result = invoke("diff", str(repo))

    assert result.exit_code == 0
    assert "No changes found" in result.output


def test_same_source_and_target_compares_against_head(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "a.txt", "one\n", "feat: add a")
    git("checkout -q -b feature")
    commit_file(repo, git, write_file, "a.txt", "one\ntwo\n", "feat: extend a")

    parsed = json.loads(
        invoke("diff", str(repo), "--source", "main", "--target", "main", "--json").output
    )

    assert [h["file_name"] for h in parsed["hunks"]] == ["a.txt"]
    assert parsed["hunks"][0]["stats"]["added"] == 1


def test_staged_source_against_branch(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "a.txt", "one\n", "feat: add a")
    git("checkout -q -b feature")
    commit_file(repo, git, write_file, "b.txt", "bee\n", "feat: add b")

    parsed = json.loads(
        invoke("diff", str(repo), "--source", "staged", "--target", "main", "--json").output
    )

    assert [h["file_name"] for h in parsed["hunks"]] == ["b.txt"]


def test_diff_text_output(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "a.py", "x = 1\n", "feat: add a")
    write_file(repo, "a.py", "x = 1\ny = 2\n")

    result = invoke("diff", str(repo), "-U", "0")

    assert result.exit_code == 0
    assert "a.py:2" in result.output
    assert "+y = 2" in result.output
    assert "1 file changed, 1 insertions(+), 0 deletions(-)" in result.output


def test_diff_outside_repository(tmp_path):
    result = invoke("diff", str(tmp_path))

    assert result.exit_code == 1
    assert "Not a git repository or git not found" in result.output


def test_diff_rejects_negative_context(tmp_git_repo):
    repo, _ = tmp_git_repo
    result = invoke("diff", str(repo), "--context", "-1")
    assert result.exit_code == 2


def test_refs_json(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "a.txt", "one\n", "feat: first")
    commit_file(repo, git, write_file, "a.txt", "two\n", "fix: second")
    git("branch feature")

    result = invoke("refs", str(repo), "--json")

    assert result.exit_code == 0
    parsed = json.loads(result.output)
    assert sorted(b["name"] for b in parsed["branches"]) == ["feature", "main"]
    assert [c["message"] for c in parsed["recent_commits"]] == ["fix: second", "feat: first"]
    assert all(len(c["short_hash"]) >= 4 for c in parsed["recent_commits"])


def test_refs_text_output(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "a.txt", "one\n", "feat: first")

    result = invoke("refs", str(repo), "--max-count", "1")

    assert result.exit_code == 0
    assert "Branches:" in result.output
    assert "  main" in result.output
    assert "feat: first" in result.output


def test_is_git_repo(tmp_git_repo, tmp_path):
    repo, _ = tmp_git_repo
    outside = tmp_path / "plain"
    outside.mkdir()

    assert gh.is_git_repo(str(repo))
    assert not gh.is_git_repo(str(outside))
    assert not gh.is_git_repo(str(tmp_path / "does-not-exist"))


def test_open_uses_editor_override(monkeypatch, tmp_path):
    monkeypatch.setenv("GIT_HUNKS_EDITOR", "true")
    result = invoke("open", "a.py", "--line", "3", "--directory", str(tmp_path))
    assert result.exit_code == 0


def test_open_reports_editor_failure(monkeypatch, tmp_path):
    monkeypatch.setenv("GIT_HUNKS_EDITOR", "false")
    result = invoke("open", "a.py", "--directory", str(tmp_path))
    assert result.exit_code == 1
    assert "Editor command failed" in result.output


def test_non_ascii_untracked_file_is_included(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "a.txt", "one\n", "feat: add a")
    write_file(repo, "café.txt", "hello")

    result = invoke("diff", str(repo), "--untracked", "--json")

    assert result.exit_code == 0
    parsed = json.loads(result.output)
    assert [h["file_name"] for h in parsed["hunks"]] == ["café.txt"]
    hunk = parsed["hunks"][0]
    assert hunk["stats"]["added"] == 1
    assert hunk["stats"]["size"] == len("hello")


def test_unreadable_no_index_path_is_a_failure(tmp_git_repo):
    repo, _ = tmp_git_repo

    with pytest.raises(gh.InvocationFailedError):
        gh.run_git(["diff", "--no-index", os.devnull, "missing.txt"], str(repo), ok_codes=(0, 1))


def test_diff_from_subdirectory_uses_repository_root(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "sub/a.txt", "one\n", "feat: add sub/a")
    write_file(repo, "sub/a.txt", "two\n")
    write_file(repo, "sub/new.txt", "hello\n")

    result = gh.get_git_diff(str(repo / "sub"), include_untracked=True)

    assert [h["file_name"] for h in result["hunks"]] == ["sub/a.txt", "sub/new.txt"]
    for hunk in result["hunks"]:
        assert hunk["stats"]["size"] > 0
        assert hunk["stats"]["modified"] != "unknown"


def test_diff_text_output_with_absolute_times(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    commit_file(repo, git, write_file, "a.py", "x = 1\n", "feat: add a")
    write_file(repo, "a.py", "x = 2\n")

    result = invoke("diff", str(repo), "--absolute-times")

    assert result.exit_code == 0
    assert "ago" not in result.output
    assert "modified 20" in result.output
