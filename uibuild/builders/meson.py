# SPDX-License-Identifier: MIT
"""Native build driver: meson configuration followed by ninja.

Configuration runs once per build directory; meson's ``build.ninja``
doubles as the sentinel. Compilation runs on every invocation and lets
ninja decide what is out of date.
"""

from __future__ import annotations

import logging
from pathlib import Path

from uibuild.configure.config import CONFIGURED_SENTINEL
from uibuild.configure.platform import LinkMode
from uibuild.source import SOURCE_MARKER, require_source_file
from uibuild.util.commands import Command, ProcessRunner

logger = logging.getLogger(__name__)


def is_configured(build_dir: Path) -> bool:
    """Check whether meson has already configured build_dir."""
    return (build_dir / CONFIGURED_SENTINEL).exists()


class MesonDriver:
    """Drive libui's meson project.

    Example:
        driver = MesonDriver(ProcessRunner())
        driver.configure_if_needed(src, build, LinkMode.STATIC)
        driver.compile(build)
    """

    def __init__(
        self,
        runner: ProcessRunner,
        *,
        meson: str = "meson",
        ninja: str = "ninja",
    ) -> None:
        self._runner = runner
        self._meson = meson
        self._ninja = ninja

    def configure_command(
        self,
        source_dir: Path,
        build_dir: Path,
        link_mode: LinkMode,
        windres: str | None = None,
    ) -> Command:
        env = {"WINDRES": windres} if windres is not None else {}
        return Command(
            self._meson,
            (
                str(source_dir),
                str(build_dir),
                "--default-library",
                link_mode.meson_library_kind,
                "--buildtype=release",
                "--backend=ninja",
            ),
            cwd=source_dir,
            env=env,
        )

    def compile_command(self, build_dir: Path) -> Command:
        return Command(self._ninja, cwd=build_dir)

    def configure_if_needed(
        self,
        source_dir: Path,
        build_dir: Path,
        link_mode: LinkMode,
        windres: str | None = None,
    ) -> bool:
        """Run meson unless build_dir is already configured.

        Args:
            source_dir: The libui source tree.
            build_dir: Meson build directory.
            link_mode: Selects --default-library static or shared.
            windres: Resource compiler handed to meson via WINDRES.

        Returns:
            True if meson was run.

        Raises:
            SourceUnavailableError: If source_dir has no meson.build.
            ExternalProcessError: If meson fails.
        """
        require_source_file(source_dir / SOURCE_MARKER)
        if is_configured(build_dir):
            logger.debug("%s already configured, skipping meson", build_dir)
            return False

        build_dir.parent.mkdir(parents=True, exist_ok=True)
        self._runner.run(
            self.configure_command(source_dir, build_dir, link_mode, windres)
        )
        return True

    def compile(self, build_dir: Path) -> None:
        """Run ninja in build_dir.

        Raises:
            ExternalProcessError: If ninja fails.
        """
        self._runner.run(self.compile_command(build_dir))
