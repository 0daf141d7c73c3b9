# taskrunner

`taskrunner` holds pieces that a YAML-driven task runner is built from:
running shell commands, deciding from source files whether a task is up to
date, hashing task runs, listing task names, writing a starter `Taskfile.yml`,
and a small `sleepit` command for checking how interrupts reach child
processes.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `taskrunner.execext`
  - `run_command(command, dir, env, posix_opts, bash_opts, stdin, stdout, stderr)`
    runs a command through `bash` (or `sh` when bash is missing) with `-e`
    always set. `posix_opts` become `-x` or `-o name` flags, `bash_opts` are
    turned on with `shopt -s`. A missing working directory is allowed. A
    non-zero exit raises `ExitStatusError`, whose `status` is the exit code;
    a command killed by a signal reports `128 + signal`.
  - `is_exit_error(err)` tells whether an error is an `ExitStatusError`.
  - `expand(s)` expands `~` and environment variables in a shell word and
    returns its first field.
- `taskrunner.fingerprint.sources`
  - `ChecksumChecker(temp_dir, dry)` stores an MD5 of the source files (their
    names and contents) under `<temp_dir>/checksum/` and reports a task up to
    date when the sum is unchanged and every `generates` pattern matches a file.
  - `TimestampChecker(temp_dir, dry)` compares modification times of sources
    with those of generated files and a stamp file under
    `<temp_dir>/timestamp/`.
  - `NoneChecker()` never reports a task up to date.
  - `new_sources_checker(method, temp_dir, dry)` picks one by the names
    `checksum`, `timestamp` or `none`; any other name raises `TaskError`.
  - `glob_files(directory, pattern)` returns matching files (not directories),
    with `**` matching across directories.
  - `normalize_filename(name)` replaces characters unsafe in file names with `-`.

  With `dry=True` the checkers write nothing to disk.
- `taskrunner.hashing` – `get_hash(task, default_run)` gives the key under
  which a task run is remembered: `always` gives an empty key, `once` the task
  name, `when_changed` the name plus a hash of the whole task structure.
  `empty`, `name` and `structural_hash` are the three functions behind it.
- `taskrunner.listing` – `ListOptions` with `should_list_tasks()` and
  `validate()`, which raises `TaskError` for `--list` together with
  `--list-all`, or `--json` without either. `list_task_names(tasks, all_tasks,
  stream)` prints sorted task names and aliases, leaving out internal tasks
  and, unless `all_tasks` is set, tasks without a description.
- `taskrunner.scaffold` – `init_taskfile(stream, directory)` writes a starter
  `Taskfile.yml`, returns its path and raises `TaskfileAlreadyExistsError` if
  one is already there.
- `taskrunner.errors` – `TaskError` and its subclasses `TaskNotFoundError`,
  `MultipleTasksWithAliasError`, `TaskInternalError`, `TaskRunError` (with
  `exit_code()`), `MaximumTaskCallExceededError` and
  `TaskfileAlreadyExistsError`.
- `taskrunner.editors` – `EditorTaskfile`, `EditorTask` and `EditorLocation`,
  the task list shape for editor integrations; `EditorTaskfile.to_dict()` gives
  its JSON-ready form.
- `taskrunner.filepathext` – `smart_join(a, b)` joins unless `b` is absolute;
  `try_abs_to_rel(abs_path)` makes a path relative to the working directory
  when it can.
- `taskrunner.platforms` – `is_known_os(name)` and `is_known_arch(name)`.
- `taskrunner.sequences` – `unique_join(*args)` concatenates, sorts and
  de-duplicates.
- `taskrunner.sysinfo` – `owner(path)` returns the owning user id, or `-1` on
  Windows.
- `taskrunner.version` – `get_version()` returns the installed version or
  `"unknown"`.

## Example

```python
from types import SimpleNamespace

from taskrunner.fingerprint.sources import new_sources_checker
from taskrunner.hashing import get_hash

task = SimpleNamespace(
    task="build", label="", dir=".", run="",
    sources=["src/**/*.py"], generates=["dist/*"],
)

checker = new_sources_checker("checksum", ".task", dry=False)
if not checker.is_up_to_date(task):
    print("build needs to run")

print(get_hash(task, "once"))  # "build"
```

## The `sleepit` command

`sleepit` sleeps for a while and can be told how to react to Ctrl-C.

```
sleepit version
sleepit default -sleep=2s
sleepit handle -sleep=10s -cleanup=2s
sleepit handle -sleep=10s -cleanup=50ms -term-after=2
```

Durations take the forms `300ms`, `1.5h` or `2h45m`. It prints
`sleepit: ready` once it is safe to send it signals. It exits with 0 when the
work finishes, 3 when the cleanup after an interrupt finishes, 4 when stopped
by the `-term-after` count of interrupts, and 2 on bad usage.

## What this package does not do

There is no `task` command here and no reader for `Taskfile.yml`: the package
does not load Taskfiles, resolve task variables, render templates, shape
task output, or schedule and run tasks with their dependencies. Its pieces
take task objects built by the caller, which need attributes such as `task`,
`dir`, `sources`, `generates`, `run`, `desc`, `aliases` and `internal`.