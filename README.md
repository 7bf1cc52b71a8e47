# space

A Python library for managing multi-repo git worktree workspaces.

A *workspace* is a directory that holds one git worktree per repository you
are working on together. `space` finds your repositories, creates worktrees
for them side by side under one workspace directory, reports their branch and
status, and removes them cleanly when you are done.

It needs Python 3.11 or later and `git` on your `PATH`. Install it from the
project directory with pip; the `test` extra adds pytest.

## Configuration

`space.config.SpaceConfig.load()` reads `config.toml` from the `space` folder
of your user configuration directory (`space.config.config_path()`), and falls
back to `SpaceConfig.default()` when the file does not exist:

```toml
[repos]
roots = ["/home/me/projects"]
max_depth = 3
cache_age_secs = 3600

[workspaces]
dir = "/home/me/workspaces"
```

`SpaceConfig.from_toml()` raises `ValueError` on a missing table or a value of
the wrong type. `SpaceConfig.save()` writes the file back. Discovered
repositories are cached in `repos.cache` beside it (`space.config.cache_path()`).

## Finding repositories

```python
from space.config import SpaceConfig, cache_path
from space.repo import find_repos_in, fuzzy_match, load_cache, save_cache

cfg = SpaceConfig.load()
repos = find_repos_in(cfg.repos.roots, cfg.repos.max_depth)
save_cache(cache_path(), repos)

for path in fuzzy_match("api", load_cache(cache_path()) or []):
    print(path)
```

`find_repos_in` does not descend into `.git` directories and leaves out
repositories nested inside another one.

## Workspaces

```python
from space.workspace import (
    DetachedHead, ExistingBranch, NewBranch,
    create_worktree, list_workspaces, remove_workspace, workspace_detail,
)

create_worktree("/home/me/projects/api", cfg.workspaces.dir, "feature-x", NewBranch("feature-x"))
for ws in list_workspaces(cfg.workspaces.dir):
    print(ws.name)
detail = workspace_detail(cfg.workspaces.dir, "feature-x")
remove_workspace(cfg.workspaces.dir, "feature-x", force=True)
```

Branch strategies:

- `NewBranch(name)` creates the branch off the repository's current branch,
  reusing a local branch of that name, or tracking `origin/<name>`, if one exists;
- `ExistingBranch(name)` checks out an existing branch; an `origin/...` name
  creates a local tracking branch;
- `DetachedHead()` checks out a detached HEAD at the repository's current branch.

Failures raise `space.workspace.WorkspaceError` carrying git's own message.
`space.git` offers `current_branch`, `repo_status`, `ahead_behind`,
`list_branches` and `detect_base_branch`, raising `space.git.GitError`.

## Printed reports

- `space.reports.run_list(verbose)` prints the workspaces with their repo
  count, and with `verbose` each repo's branch and clean/modified state.
- `space.reports.run_status(name)` prints branch, file counts and
  ahead/behind for every repo of one workspace.
- `space.repos_command.run_repos(refresh)` prints the cached repositories,
  scanning first when `refresh` is set or no cache exists.
- `space.commands.run_go(name)` emits the directory of a workspace, and
  `space.commands.run_remove(name, force)` removes one (it refuses unless
  `force` is true).

Colour is used when standard output is a terminal; `NO_COLOR` turns it off and
`CLICOLOR_FORCE` turns it on.

### Changing directory

A program cannot change the directory of the shell that started it.
`space.commands.emit_cd_target(path)` writes the path to the file named by the
environment variable `__SPACE_CD_FILE__` when it is set, and otherwise prints
a line `__SPACE_CD__:<path>`; a shell function can read either and `cd` there.

## Interactive screen state

`space.tui` holds the state and key handling of the interactive screens,
independent of any terminal: `App` (loaded with `App.load()`), the `update`
function for dashboard `Message`s, the fuzzy picker, and key handlers for the
create, add, go-to, delete, search and configuration screens
(`handle_create_key`, `handle_add_key`, `handle_go_key`, `handle_delete_key`,
`handle_search_key`, `handle_config_key`). Keys are passed as
`space.tui.textinput.Key` values:

```python
from space.tui.app import App, Message, update
from space.tui.create_flow import handle_create_key
from space.tui.textinput import Key

app = App.load()
update(app, Message.START_CREATE)
handle_create_key(app, Key("tab"))
handle_create_key(app, Key("enter"))
```

## What this package does not do

- It installs no command-line program; the functions above are called from Python.
- It does not draw the dashboard or run a terminal event loop: the screen
  state and key handlers are there, but nothing renders them or reads keys
  from a terminal.
- It does not generate shell completions.