# SPDX-License-Identifier: MIT
"""Command-line interface for uibuild."""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uibuild.configure.config import BuildConfig
    from uibuild.core.errors import UibuildError

COMMANDS = ("build", "plan", "bindings", "clean")

# Set up logging
logger = logging.getLogger("uibuild")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    # Directives go to stdout; keep logs on stderr
    logging.basicConfig(level=level, format=fmt, stream=sys.stderr)


def parse_variables(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Parse KEY=value arguments from a list.

    Args:
        args: List of arguments.

    Returns:
        Tuple of (variables dict, remaining args).
    """
    variables: dict[str, str] = {}
    remaining: list[str] = []

    for arg in args:
        if "=" in arg and not arg.startswith("-"):
            key, _, value = arg.partition("=")
            if key:  # Valid KEY=value
                variables[key] = value
            else:
                remaining.append(arg)
        else:
            remaining.append(arg)

    return variables, remaining


def _load_config(args: argparse.Namespace) -> BuildConfig:
    from uibuild import get_var, set_cli_vars
    from uibuild.configure.config import BuildConfig

    variables, remaining = parse_variables(getattr(args, "extra", []))
    if remaining:
        logger.warning("Ignoring unexpected arguments: %s", " ".join(remaining))
    set_cli_vars(variables)
    return BuildConfig.from_vars(
        get_var,
        static_feature=getattr(args, "static", False),
        out_dir=getattr(args, "out_dir", None),
    )


def _report(e: UibuildError) -> int:
    step = f"{e.step} failed: " if e.step else ""
    logger.error("%s%s", step, e.message)
    return 1


def cmd_build(args: argparse.Namespace) -> int:
    """Run the full pipeline and print link directives."""
    from uibuild.build import emit_directives, run_build
    from uibuild.core.errors import UibuildError

    setup_logging(args.verbose, args.debug)
    try:
        config = _load_config(args)
        result = run_build(config)
    except UibuildError as e:
        return _report(e)

    emit_directives(result.directives())
    return 0


def cmd_plan(args: argparse.Namespace) -> int:
    """Print the link plan without building."""
    from uibuild.build import emit_directives, plan_link
    from uibuild.core.errors import UibuildError
    from uibuild.util.commands import ProcessRunner

    setup_logging(args.verbose, args.debug)
    try:
        config = _load_config(args)
        link_plan = plan_link(config, ProcessRunner())
    except UibuildError as e:
        return _report(e)

    emit_directives(link_plan.directives())
    return 0


def cmd_bindings(args: argparse.Namespace) -> int:
    """Generate the cffi binding source only."""
    from uibuild.build import build_bindings
    from uibuild.core.errors import UibuildError
    from uibuild.util.commands import ProcessRunner

    setup_logging(args.verbose, args.debug)
    try:
        config = _load_config(args)
        output = build_bindings(config, ProcessRunner())
    except UibuildError as e:
        return _report(e)

    print(output)
    return 0


def cmd_clean(args: argparse.Namespace) -> int:
    """Remove build output.

    Removes OUT_DIR/build, or all of OUT_DIR with --all.
    Refuses to remove an OUT_DIR that holds the repository itself.
    """
    from uibuild.core.errors import ConfigurationError, UibuildError

    setup_logging(args.verbose, args.debug)
    try:
        config = _load_config(args)
        target: Path = config.paths.out_dir if args.all else config.paths.build_dir
        repo_root = config.paths.repo_root.resolve()
        resolved = target.resolve()
        if resolved == repo_root or resolved in repo_root.parents:
            raise ConfigurationError(
                f"refusing to remove {target}: it contains the repository"
            )
    except UibuildError as e:
        return _report(e)

    if target.exists():
        logger.info("Removing %s", target)
        shutil.rmtree(target)
    else:
        logger.info("Nothing to clean: %s does not exist", target)
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")
    parser.add_argument(
        "-o", "--out-dir", help="Build output directory (default: $OUT_DIR)"
    )
    parser.add_argument(
        "extra",
        nargs="*",
        help="Build variables (KEY=value)",
    )


def add_link_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--static",
        action="store_true",
        help="Link libui statically (same as UIBUILD_FEATURE_STATIC=1)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the uibuild CLI."""
    parser = argparse.ArgumentParser(
        prog="uibuild",
        description="Build the vendored libui and emit link directives.",
        epilog="Run 'uibuild <command> --help' for command-specific help.",
    )
    from uibuild import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # uibuild build
    build_parser = subparsers.add_parser(
        "build", help="Build libui and print link directives"
    )
    add_common_args(build_parser)
    add_link_args(build_parser)
    build_parser.set_defaults(func=cmd_build)

    # uibuild plan
    plan_parser = subparsers.add_parser(
        "plan", help="Print link directives without building"
    )
    add_common_args(plan_parser)
    add_link_args(plan_parser)
    plan_parser.set_defaults(func=cmd_plan)

    # uibuild bindings
    bindings_parser = subparsers.add_parser(
        "bindings", help="Generate the cffi binding source for ui.h"
    )
    add_common_args(bindings_parser)
    bindings_parser.set_defaults(func=cmd_bindings)

    # uibuild clean
    clean_parser = subparsers.add_parser("clean", help="Remove build output")
    add_common_args(clean_parser)
    clean_parser.add_argument(
        "-a", "--all", action="store_true", help="Remove the entire output directory"
    )
    clean_parser.set_defaults(func=cmd_clean)

    if argv is None:
        argv = sys.argv[1:]

    # Default command: build
    if not argv or argv[0] not in (*COMMANDS, "-h", "--help", "--version"):
        argv = ["build", *argv]

    args = parser.parse_args(argv)

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
