from pathlib import Path

from space.repo import find_repos_in, fuzzy_match, load_cache, save_cache


def _make_git_repo(path):
    (path / ".git").mkdir(parents=True)


def test_finds_git_repos_within_root(tmp_path):
    repo = tmp_path / "my-repo"
    _make_git_repo(repo)
    assert find_repos_in([tmp_path], 3) == [repo]


def test_respects_max_depth(tmp_path):
    _make_git_repo(tmp_path / "a/b/c/d/deep-repo")
    assert find_repos_in([tmp_path], 2) == []


def test_max_depth_boundary_includes_git_at_limit(tmp_path):
    repo = tmp_path / "group" / "repo"
    _make_git_repo(repo)
    assert find_repos_in([tmp_path], 3) == [repo]
    assert find_repos_in([tmp_path], 2) == []


def test_does_not_descend_into_git_dirs(tmp_path):
    outer = tmp_path / "outer"
    _make_git_repo(outer)
    _make_git_repo(outer / "inner")
    assert find_repos_in([tmp_path], 5) == [outer]


def test_missing_roots_are_skipped(tmp_path):
    repo = tmp_path / "r"
    _make_git_repo(repo)
    assert find_repos_in([tmp_path / "nope", tmp_path], 3) == [repo]


def test_multiple_roots_are_combined(tmp_path):
    first = tmp_path / "one" / "a"
    second = tmp_path / "two" / "b"
    _make_git_repo(first)
    _make_git_repo(second)
    assert find_repos_in([tmp_path / "one", tmp_path / "two"], 3) == [first, second]


def test_fuzzy_match_returns_best_matches():
    repos = [
        Path("/work/acme/acme-api"),
        Path("/work/acme/acme-web"),
        Path("/work/tools/auth-service"),
    ]
    matches = fuzzy_match("acme-api", repos)
    assert matches
    assert matches[0].name == "acme-api"


def test_fuzzy_match_no_results_for_garbage():
    assert fuzzy_match("zzzzzzzzz", [Path("/work/acme/acme-api")]) == []


def test_fuzzy_match_empty_query_returns_all():
    repos = [Path("/b"), Path("/a")]
    assert fuzzy_match("", repos) == repos


def test_cache_round_trips(tmp_path):
    cache = tmp_path / "repos.cache"
    paths = [Path("/work/repo-a"), Path("/work/repo-b")]
    save_cache(cache, paths)
    assert load_cache(cache) == paths


def test_cache_creates_parent_and_skips_blank_lines(tmp_path):
    cache = tmp_path / "deep" / "repos.cache"
    save_cache(cache, [Path("/x")])
    cache.write_text("/x\n\n/y\n")
    assert load_cache(cache) == [Path("/x"), Path("/y")]


def test_load_missing_cache_is_none(tmp_path):
    assert load_cache(tmp_path / "missing") is None