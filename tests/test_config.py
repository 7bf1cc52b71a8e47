from pathlib import Path

import pytest

from space.config import (
    RepoConfig,
    SpaceConfig,
    WorkspaceConfig,
    cache_path,
    config_path,
)


def test_default_config_has_reasonable_values():
    cfg = SpaceConfig.default()
    assert cfg.repos.roots, "roots must not be empty"
    assert cfg.repos.max_depth > 0
    assert cfg.repos.cache_age_secs > 0
    assert str(cfg.workspaces.dir) != ""


def test_default_roots_point_at_projects():
    cfg = SpaceConfig.default()
    assert cfg.repos.roots == [Path.home() / "projects"]
    assert cfg.workspaces.dir == Path.home() / "workspaces"


def test_loads_from_toml_string():
    text = """
[repos]
roots = ["/tmp/test-repos"]
max_depth = 2
cache_age_secs = 1800

[workspaces]
dir = "/tmp/test-workspaces"
"""
    cfg = SpaceConfig.from_toml(text)
    assert cfg.repos.roots == [Path("/tmp/test-repos")]
    assert cfg.repos.max_depth == 2
    assert cfg.repos.cache_age_secs == 1800
    assert cfg.workspaces.dir == Path("/tmp/test-workspaces")


def test_round_trips_through_toml():
    original = SpaceConfig.default()
    restored = SpaceConfig.from_toml(original.to_toml())
    assert original.repos.max_depth == restored.repos.max_depth
    assert original.repos.roots == restored.repos.roots
    assert restored == original


def test_config_path_is_under_config_dir():
    assert config_path().parts[-2:] == ("space", "config.toml")


def test_cache_path_is_next_to_config():
    assert cache_path().parent == config_path().parent
    assert cache_path().name == "repos.cache"


def test_load_missing_file_gives_defaults(tmp_path):
    assert SpaceConfig.load(tmp_path / "absent.toml") == SpaceConfig.default()


def test_save_then_load(tmp_path):
    cfg = SpaceConfig(
        repos=RepoConfig(roots=[tmp_path / "a", tmp_path / "b"], max_depth=5, cache_age_secs=10),
        workspaces=WorkspaceConfig(dir=tmp_path / "ws"),
    )
    target = tmp_path / "nested" / "config.toml"
    cfg.save(target)
    assert SpaceConfig.load(target) == cfg


def test_invalid_max_depth_is_rejected():
    text = """
[repos]
roots = ["/tmp/r"]
max_depth = "deep"
cache_age_secs = 1

[workspaces]
dir = "/tmp/w"
"""
    with pytest.raises(ValueError):
        SpaceConfig.from_toml(text)


def test_missing_table_is_rejected():
    with pytest.raises(ValueError):
        SpaceConfig.from_toml('[workspaces]\ndir = "/tmp/w"\n')