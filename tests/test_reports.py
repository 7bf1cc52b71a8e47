import subprocess

import pytest

from space.config import RepoConfig, SpaceConfig, WorkspaceConfig
from space.reports import run_list, run_status
from space.workspace import WorkspaceError


def _git(cwd, *args):
    return subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)


def _init_repo(path):
    path.mkdir(parents=True)
    _git(path, "init", "-b", "main")
    _git(path, "config", "user.email", "space@example.com")
    _git(path, "config", "user.name", "T")
    _git(path, "-c", "commit.gpgsign=false", "commit", "--allow-empty", "-m", "init")


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.delenv("CLICOLOR_FORCE", raising=False)
    ws_dir = tmp_path / "workspaces"
    ws_dir.mkdir()
    return SpaceConfig(
        repos=RepoConfig(roots=[tmp_path / "projects"], max_depth=3, cache_age_secs=3600),
        workspaces=WorkspaceConfig(dir=ws_dir),
    )


def test_list_with_no_workspaces(config, capsys):
    run_list(False, config)
    assert capsys.readouterr().out == "No workspaces. Use `space create` to make one.\n"


def test_list_counts_worktrees(config, capsys):
    ws = config.workspaces.dir / "alpha"
    (ws / "one" / ".git").mkdir(parents=True)
    (ws / "two" / ".git").mkdir(parents=True)
    (ws / "plain").mkdir()
    (config.workspaces.dir / "beta").mkdir()
    run_list(False, config)
    assert capsys.readouterr().out.splitlines() == ["alpha  (2 repos)", "beta  (0 repos)"]


def test_verbose_list_shows_branch_and_state(config, capsys):
    ws = config.workspaces.dir / "alpha"
    _init_repo(ws / "api")
    _init_repo(ws / "web")
    (ws / "web" / "x.txt").write_text("x")
    _git(ws / "web", "add", "x.txt")
    run_list(True, config)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "alpha  (2 repos)"
    assert lines[1].startswith("  api")
    assert lines[1].endswith("main  [clean]")
    assert lines[2].endswith("main  [modified]")


def test_status_clean_repo(config, capsys):
    _init_repo(config.workspaces.dir / "alpha" / "api")
    run_status("alpha", config)
    out = capsys.readouterr().out
    assert "Workspace: alpha" in out
    assert "    Branch: main" in out
    assert "    Status: clean" in out
    assert "Tracking" not in out


def test_status_dirty_repo(config, capsys):
    repo = config.workspaces.dir / "alpha" / "api"
    _init_repo(repo)
    (repo / "new.txt").write_text("n")
    run_status("alpha", config)
    assert "0 modified, 0 staged, 1 untracked" in capsys.readouterr().out


def test_status_without_repos(config, capsys):
    (config.workspaces.dir / "empty").mkdir()
    run_status("empty", config)
    assert capsys.readouterr().out.endswith("\n\n  (no repos)\n")


def test_status_missing_workspace(config):
    with pytest.raises(WorkspaceError, match="workspace 'ghost' not found"):
        run_status("ghost", config)