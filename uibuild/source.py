# SPDX-License-Identifier: MIT
"""Vendored source preparation."""

from __future__ import annotations

import logging
from pathlib import Path

from uibuild.core.errors import ExternalProcessError, SourceUnavailableError
from uibuild.util.commands import Command, ProcessRunner

logger = logging.getLogger(__name__)

# A checked-out libui tree always has its top-level meson project file
SOURCE_MARKER = "meson.build"


def is_checked_out(source_dir: Path) -> bool:
    return (source_dir / SOURCE_MARKER).exists()


def prepare_source(
    source_dir: Path,
    repo_root: Path,
    runner: ProcessRunner,
    *,
    git: str = "git",
) -> bool:
    """Make sure the vendored source tree is present.

    Fetches submodules when the tree is missing. A failed fetch is only
    logged: steps that need the source raise SourceUnavailableError.

    Returns:
        True if the tree is checked out afterwards.
    """
    if is_checked_out(source_dir):
        logger.debug("Vendored source present at %s", source_dir)
        return True

    logger.info("Vendored source missing at %s, fetching submodules", source_dir)
    command = Command(
        git, ("submodule", "update", "--init", "--recursive"), cwd=repo_root
    )
    try:
        runner.run(command)
    except ExternalProcessError as e:
        logger.warning("Submodule fetch failed: %s", e.message)
        return False
    return is_checked_out(source_dir)


def require_source_file(path: Path) -> Path:
    """Return path, raising SourceUnavailableError if it does not exist."""
    if not path.exists():
        raise SourceUnavailableError(path)
    return path
