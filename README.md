# oxidizr

A command-line tool that installs Rust-based replacements for essential system
packages, `uutils-coreutils` and `sudo-rs`, and makes them the default on a
Fedora system.

> **Warning:** oxidizr makes significant changes to your system. Depending on
> your configuration and workload, its experiments could stop your machine from
> booting or make your workloads fail. Use with caution.

## Installation

```sh
pip install .
```

This installs the `oxidizr` command. The package has no runtime dependencies
beyond the standard library.

## Usage

oxidizr must be run as root; otherwise it prints
`Error: This program must be run as root` and exits with status 1.

```sh
# Enable the default experiments (coreutils and sudo-rs)
sudo oxidizr enable

# Enable only selected experiments
sudo oxidizr enable --experiments coreutils

# Enable every known experiment without a confirmation prompt
sudo oxidizr enable --all --yes

# Restore the original utilities
sudo oxidizr disable
```

Unless `--yes` is given, oxidizr prints a warning and asks `Continue? (y/N)`;
any answer other than `y`/`yes` exits with status 1.

### Options

Options may be given before or after the `enable` / `disable` command.

| Option | Meaning |
| --- | --- |
| `-y`, `--yes` | Skip confirmation prompts |
| `-a`, `--all` | Enable or disable all known experiments (`--experiments` is then ignored) |
| `-e`, `--experiments NAME...` | Select experiments (default: `coreutils sudo-rs`) |
| `--no-compatibility-check` | Skip the Fedora check and the per-experiment release checks (dangerous) |
| `-v`, `--verbose` / `-q`, `--quiet` | Increase or decrease log verbosity (default: info); may be repeated |
| `-V`, `--version` | Print the version and exit |

The distribution is read with `lsb_release -is` and `lsb_release -rs`. Without
`--no-compatibility-check`, oxidizr refuses to run on anything but Fedora, and
skips (with a warning) any experiment whose supported releases do not include
the running release.

### Experiments

Both experiments currently support Fedora release `42`.

- **coreutils** – runs `dnf install -y uutils-coreutils`, then, for each file in
  `/usr/libexec/uutils-coreutils`, finds the utility of the same name on the
  `PATH` (falling back to `/usr/bin/<name>`) and replaces it with a symlink to
  `/usr/bin/coreutils`.
- **sudo-rs** – runs `dnf install -y sudo-rs`, then does the same for
  `su-rs`, `sudo-rs` and `visudo-rs`, linking each to its file in `/usr/bin`.

A file that is replaced is first copied, with its permission bits, to
`.<name>.oxidizr.bak` in the same directory. Targets that are already symlinks
are left alone.

`disable` acts only on experiments whose package `dnf list` reports; for each
it moves the backups back into place (warning where none exists) and runs
`dnf remove -y <package>`.

## Using it as a library

- `oxidizr.worker.Worker` is the abstract interface the experiments use to run
  commands, query and install packages, and back up, restore and symlink files.
  `oxidizr.worker.System` implements it on the real machine; commands that
  exit non-zero raise `oxidizr.worker.CommandError`.
- `oxidizr.mock.MockSystem` is an in-memory `Worker` that touches nothing and
  records the commands run and the files backed up, restored and symlinked.
  Files, installed packages and command output are set with `mock_files`,
  `mock_install_package` and `mock_command`.
- `oxidizr.uutils.UutilsExperiment` and `oxidizr.sudors.SudoRsExperiment` are
  the experiments; `oxidizr.experiment.Experiment` wraps one with the
  compatibility and installation checks, and `oxidizr.cli.all_experiments`
  returns every known experiment bound to a `Worker`.

```python
from oxidizr.cli import all_experiments
from oxidizr.mock import MockSystem

system = MockSystem()
system.mock_files([("/usr/libexec/uutils-coreutils/date", "", False),
                   ("/usr/bin/date", "", True)])
for experiment in all_experiments(system):
    experiment.enable()
print(system.commands)
print(system.created_symlinks)
```

## Limitations

- Only `dnf` is used for package management and only Fedora passes the
  distribution check; other distributions run only with
  `--no-compatibility-check`.
- There is no dry-run option on the command line; `MockSystem` serves that
  purpose from Python.

## Running the tests

```sh
pip install ".[test]"
pytest
```