"""The command that lists discovered repositories."""

from __future__ import annotations

import itertools
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from space.config import SpaceConfig, cache_path
from space.repo import find_repos_in, load_cache, save_cache
from space.reports import _paint

_BOLD = "1"
_BLUE = "34"
_CYAN = "36"
_FRAMES = "\u280b\u2819\u2839\u2838\u283c\u2834\u2826\u2827\u2807\u280f"


@contextmanager
def _spinner(message: str) -> Iterator[None]:
    """Show a spinner on stderr while the block runs, when stderr is a terminal."""
    stream = sys.stderr
    isatty = getattr(stream, "isatty", None)
    if not (isatty and isatty()):
        yield
        return
    stop = threading.Event()

    def spin() -> None:
        for frame in itertools.cycle(_FRAMES):
            stream.write(f"\r\x1b[36m{frame}\x1b[0m {message}")
            stream.flush()
            if stop.wait(0.08):
                break

    thread = threading.Thread(target=spin, daemon=True)
    thread.start()
    try:
        yield
    finally:
        stop.set()
        thread.join()
        stream.write("\r\x1b[K")
        stream.flush()


def run_repos(
    refresh: bool = False, config: SpaceConfig | None = None, cache_file: Path | str | None = None
) -> None:
    """Print the discovered repositories, scanning when asked or when no cache exists."""
    cfg = config if config is not None else SpaceConfig.load()
    cache = Path(cache_file) if cache_file is not None else cache_path()

    if refresh or not cache.exists():
        with _spinner("Scanning for repos..."):
            repos = find_repos_in(cfg.repos.roots, cfg.repos.max_depth)
            save_cache(cache, repos)
    else:
        repos = load_cache(cache) or []

    print(_paint("Discovered repositories:", _BOLD))
    print()
    for repo in repos:
        print(f"  {_paint(repo.name, _CYAN)}  ({_paint(repo.parent.name, _BLUE)})")
    print()
    roots = " ".join(str(p) for p in cfg.repos.roots)
    print(f"{_paint(str(len(repos)), _BOLD)} repos found in: {roots}")