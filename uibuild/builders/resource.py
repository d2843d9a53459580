# SPDX-License-Identifier: MIT
"""Windows resource (manifest) embedding."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from uibuild.configure.platform import LinkMode, TargetDescriptor
from uibuild.source import require_source_file
from uibuild.util.commands import Command, ProcessRunner

logger = logging.getLogger(__name__)

SHARED_RESOURCES = "shared_resources.rc"
STATIC_RESOURCES = "static_resources.rc"


def resource_script_name(link_mode: LinkMode) -> str:
    return STATIC_RESOURCES if link_mode is LinkMode.STATIC else SHARED_RESOURCES


@dataclass(frozen=True)
class EmbeddedResource:
    """A compiled resource the host must pass to its linker."""

    path: Path

    def directive(self) -> str:
        return f"link-arg={self.path}"


class ResourceEmbedder:
    """Compile the manifest resource script for the chosen link mode.

    MSVC targets use rc.exe and produce a ``.res``; GNU targets use
    windres and produce a COFF object. Other targets have no native
    resource format and are skipped.
    """

    def __init__(self, runner: ProcessRunner, *, windres: str = "windres") -> None:
        self._runner = runner
        self._windres = windres

    def compile_command(
        self,
        target: TargetDescriptor,
        script: Path,
        output: Path,
        rc: str | None = None,
    ) -> Command:
        if target.is_msvc:
            # WINDRES values are quoted for meson; strip that for argv use
            program = (rc or "rc.exe").strip('"')
            return Command(program, ("/nologo", f"/fo{output}", str(script)))
        return Command(
            self._windres.strip('"'),
            (
                "--input",
                str(script),
                "--output-format=coff",
                "--output",
                str(output),
            ),
        )

    def embed(
        self,
        target: TargetDescriptor,
        link_mode: LinkMode,
        resource_dir: Path,
        out_dir: Path,
        rc: str | None = None,
    ) -> EmbeddedResource | None:
        """Compile the resource script for link_mode.

        Args:
            target: Target being built.
            link_mode: Selects shared_resources.rc or static_resources.rc.
            resource_dir: Directory holding the .rc scripts.
            out_dir: Build-output root; results go under out_dir/resources.
            rc: Resource compiler for MSVC targets.

        Returns:
            The compiled resource, or None on non-Windows targets.

        Raises:
            SourceUnavailableError: If the resource script is missing.
            ExternalProcessError: If the resource compiler fails.
        """
        if not target.is_windows:
            logger.debug("No resource embedding for %s", target.triple)
            return None

        script = require_source_file(resource_dir / resource_script_name(link_mode))
        suffix = ".res" if target.is_msvc else ".res.o"
        output = out_dir / "resources" / f"{script.stem}{suffix}"
        output.parent.mkdir(parents=True, exist_ok=True)

        self._runner.run(self.compile_command(target, script, output, rc))
        return EmbeddedResource(output)
