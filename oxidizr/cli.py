"""Command-line entry point: select experiments and enable or disable them."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from oxidizr.experiment import Experiment
from oxidizr.sudors import SudoRsExperiment
from oxidizr.uutils import UutilsExperiment
from oxidizr.worker import System, Worker, vecs_eq

logger = logging.getLogger(__name__)

VERSION = "1.1.0"

_DESCRIPTION = (
    "A command-line utility to install modern Rust-based replacements of essential "
    "packages such as coreutils, findutils, diffutils and sudo and make them the "
    "default on a Fedora system."
)

_WARNING = (
    "⚠️ oxidizr can cause harm to your system! ⚠️\n"
    "Depending on your configuration and workload, oxidizr's\n"
    "experiments could cause your machine to fail to boot, or\n"
    "your workloads to fail. Use with caution."
)

# Offsets from the default "info" level, driven by -v and -q.
_LEVELS = [
    logging.CRITICAL + 10,  # off
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
    logging.DEBUG,  # trace
]
_DEFAULT_LEVEL_INDEX = 3


def all_experiments(system: Worker) -> list[Experiment]:
    """Return every known experiment, bound to ``system``."""
    return [
        Experiment(
            UutilsExperiment(
                "coreutils",
                system,
                "uutils-coreutils",
                ["42"],
                "/usr/bin/coreutils",
                "/usr/libexec/uutils-coreutils",
            )
        ),
        Experiment(SudoRsExperiment(system)),
    ]


def default_experiments() -> list[str]:
    """Return the experiments used when none are chosen, sorted."""
    return sorted(["coreutils", "sudo-rs"])


def selected_experiments(
    select_all: bool, selected: Sequence[str], system: Worker
) -> list[Experiment]:
    """Return the experiments chosen on the command line."""
    experiments = all_experiments(system)
    defaults = default_experiments()

    if select_all:
        if selected and not vecs_eq(list(selected), defaults):
            logger.warning("Ignoring --experiments flag as --all is set")
        return experiments

    wanted = list(selected) if selected else defaults
    return [e for e in experiments if e.name() in wanted]


def confirm_or_exit(yes: bool) -> None:
    """Ask the user to confirm; exit with status 1 unless they agree or ``yes`` is set."""
    if yes:
        return

    print(_WARNING, file=sys.stderr)
    while True:
        try:
            answer = input("Continue? (y/N) ").strip().lower()
        except (EOFError, KeyboardInterrupt, OSError):
            sys.exit(1)
        if answer in ("y", "yes"):
            return
        if answer in ("", "n", "no"):
            sys.exit(1)
        print("Type either 'y' or 'n'.", file=sys.stderr)


def enable(
    system: Worker,
    experiments: Sequence[Experiment],
    yes: bool,
    no_compatibility_check: bool,
) -> None:
    """Enable the given experiments after confirmation."""
    confirm_or_exit(yes)
    for experiment in experiments:
        experiment.enable(no_compatibility_check)


def disable(experiments: Sequence[Experiment], yes: bool) -> None:
    """Disable the given experiments after confirmation."""
    confirm_or_exit(yes)
    for experiment in experiments:
        experiment.disable()


def _add_common_options(parser: argparse.ArgumentParser, suppress: bool) -> None:
    def default(value: object) -> object:
        return argparse.SUPPRESS if suppress else value

    parser.add_argument(
        "-v", "--verbose", action="count", default=default(0),
        help="Increase logging verbosity",
    )
    parser.add_argument(
        "-q", "--quiet", action="count", default=default(0),
        help="Decrease logging verbosity",
    )
    parser.add_argument(
        "-y", "--yes", action="store_true", default=default(False),
        help="Skip confirmation prompts",
    )
    parser.add_argument(
        "-a", "--all", action="store_true", default=default(False),
        help="Enable/disable all known experiments",
    )
    parser.add_argument(
        "--no-compatibility-check", action="store_true", default=default(False),
        help="Skip compatibility checks (dangerous)",
    )
    parser.add_argument(
        "-e", "--experiments", nargs="+", metavar="EXPERIMENT",
        default=default(default_experiments()),
        help="Select experiments to enable or disable",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(prog="oxidizr", description=_DESCRIPTION)
    parser.add_argument("-V", "--version", action="version", version=f"oxidizr {VERSION}")
    _add_common_options(parser, suppress=False)

    commands = parser.add_subparsers(dest="cmd", metavar="COMMAND", required=True)
    for name, text in (
        ("enable", "Enable experiments with oxidizr."),
        ("disable", "Disable any previous experiments enabled with oxidizr."),
    ):
        sub = commands.add_parser(name, help=text, description=text)
        _add_common_options(sub, suppress=True)

    return parser.parse_args(argv)


def _configure_logging(verbose: int, quiet: int) -> None:
    index = max(0, min(len(_LEVELS) - 1, _DEFAULT_LEVEL_INDEX + verbose - quiet))
    logging.basicConfig(level=_LEVELS[index], format="%(levelname)s %(message)s")


def _run(args: argparse.Namespace) -> None:
    if os.geteuid() != 0:
        raise PermissionError("This program must be run as root")

    _configure_logging(args.verbose, args.quiet)

    system = System()

    if not args.no_compatibility_check:
        if system.distribution().id != "Fedora":
            raise RuntimeError("This program only supports Fedora")
    elif system.distribution().id != "Ubuntu":
        logger.warning(
            "Running on a non-Fedora distribution. This is unsupported and may cause "
            "system instability."
        )

    selected = selected_experiments(args.all, list(args.experiments), system)

    if args.cmd == "enable":
        enable(system, selected, args.yes, args.no_compatibility_check)
    else:
        disable(selected, args.yes)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    args = parse_args(argv)
    try:
        _run(args)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())