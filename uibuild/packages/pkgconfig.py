# SPDX-License-Identifier: MIT
"""pkg-config queries for system packages.

Static libui builds on Linux pull in GTK directly, so its libraries
have to be added to the host link line.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field

from uibuild.core.errors import ExternalProcessError, SystemPackageNotFoundError
from uibuild.util.commands import Command, ProcessRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageInfo:
    """A system package found by pkg-config.

    Attributes:
        name: pkg-config package name.
        version: Installed version.
        libraries: Library names without the -l prefix.
        library_dirs: Library search directories without the -L prefix.
    """

    name: str
    version: str = ""
    libraries: list[str] = field(default_factory=list)
    library_dirs: list[str] = field(default_factory=list)


def _strip_prefix(output: str, prefix: str) -> list[str]:
    return [
        token[len(prefix) :]
        for token in shlex.split(output)
        if token.startswith(prefix) and len(token) > len(prefix)
    ]


class PkgConfig:
    """Query packages through the pkg-config tool."""

    def __init__(self, runner: ProcessRunner, *, cmd: str = "pkg-config") -> None:
        self._runner = runner
        self._cmd = cmd

    def _query(self, *args: str) -> str:
        return self._runner.run(Command(self._cmd, args)).stdout.strip()

    def probe(self, name: str, min_version: str) -> PackageInfo:
        """Find a package at or above min_version.

        Raises:
            SystemPackageNotFoundError: If the package is missing, too
                old, or pkg-config itself cannot be run.
        """
        try:
            self._query(f"--atleast-version={min_version}", name)
            version = self._query("--modversion", name)
            lib_dirs = _strip_prefix(self._query("--libs-only-L", name), "-L")
            libs = _strip_prefix(self._query("--libs-only-l", name), "-l")
        except ExternalProcessError as e:
            detail = e.stderr.strip() or f"{e.command_line} failed"
            raise SystemPackageNotFoundError(name, min_version, detail) from e

        logger.info("Found %s %s via pkg-config", name, version)
        return PackageInfo(
            name=name, version=version, libraries=libs, library_dirs=lib_dirs
        )
