from pathlib import Path

import pytest

from space.commands import emit_cd_target, run_go, run_remove
from space.config import SpaceConfig
from space.workspace import WorkspaceError


def make_config(tmp_path: Path) -> SpaceConfig:
    roots = (tmp_path / "projects").as_posix()
    ws_dir = (tmp_path / "ws").as_posix()
    return SpaceConfig.from_toml(
        f'[repos]\nroots = ["{roots}"]\nmax_depth = 2\ncache_age_secs = 60\n\n'
        f'[workspaces]\ndir = "{ws_dir}"\n'
    )


def test_emit_writes_cd_file(tmp_path, monkeypatch, capsys):
    cd_file = tmp_path / "cd.txt"
    monkeypatch.setenv("__SPACE_CD_FILE__", str(cd_file))
    target = tmp_path / "ws" / "alpha"
    emit_cd_target(target)
    assert cd_file.read_text() == str(target)
    assert capsys.readouterr().out == ""


def test_emit_prints_marker_without_cd_file(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("__SPACE_CD_FILE__", raising=False)
    target = tmp_path / "alpha"
    emit_cd_target(target)
    assert capsys.readouterr().out == f"__SPACE_CD__:{target}\n"


def test_go_requires_name(tmp_path):
    with pytest.raises(ValueError, match="go requires a workspace name"):
        run_go(None, make_config(tmp_path))


def test_go_emits_workspace_path(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("__SPACE_CD_FILE__", raising=False)
    cfg = make_config(tmp_path)
    (cfg.workspaces.dir / "alpha").mkdir(parents=True)
    run_go("alpha", cfg)
    out = capsys.readouterr().out.strip()
    assert out.startswith("__SPACE_CD__:")
    assert Path(out.split(":", 1)[1]) == cfg.workspaces.dir / "alpha"


def test_go_unknown_workspace(tmp_path):
    cfg = make_config(tmp_path)
    (cfg.workspaces.dir / "alpha").mkdir(parents=True)
    with pytest.raises(WorkspaceError, match="workspace 'nope' not found"):
        run_go("nope", cfg)


def test_remove_requires_force(tmp_path):
    cfg = make_config(tmp_path)
    (cfg.workspaces.dir / "alpha").mkdir(parents=True)
    with pytest.raises(ValueError, match="--force"):
        run_remove("alpha", False, cfg)
    assert (cfg.workspaces.dir / "alpha").is_dir()


def test_remove_deletes_workspace(tmp_path, capsys):
    cfg = make_config(tmp_path)
    (cfg.workspaces.dir / "alpha" / "notes").mkdir(parents=True)
    run_remove("alpha", True, cfg)
    assert not (cfg.workspaces.dir / "alpha").exists()
    assert capsys.readouterr().out == "Removed workspace 'alpha'\n"


def test_remove_missing_workspace(tmp_path):
    cfg = make_config(tmp_path)
    cfg.workspaces.dir.mkdir(parents=True)
    with pytest.raises(WorkspaceError):
        run_remove("nope", True, cfg)