# SPDX-License-Identifier: MIT
"""Build configuration for uibuild.

BuildConfig collects every variable the build reads (target triple,
link-mode triggers, output directory, tool overrides) exactly once at
the start of an invocation. Nothing downstream reads the process
environment directly.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from uibuild.configure.platform import (
    LinkMode,
    TargetDescriptor,
    host_target_triple,
    parse_target_triple,
)
from uibuild.core.errors import ConfigurationError

VarGetter = Callable[[str], "str | None"]

# Name of the sentinel meson writes once a build directory is configured
CONFIGURED_SENTINEL = "build.ninja"


def _default_preprocessor() -> tuple[str, ...]:
    if sys.platform == "win32":
        return ("cl", "/nologo", "/EP")
    return ("cc", "-E", "-P")


@dataclass(frozen=True)
class ToolCommands:
    """Commands for the external tools uibuild runs."""

    git: str = "git"
    meson: str = "meson"
    ninja: str = "ninja"
    pkg_config: str = "pkg-config"
    preprocessor: tuple[str, ...] = field(default_factory=_default_preprocessor)


@dataclass(frozen=True)
class BuildPaths:
    """Absolute directories used by one invocation.

    Attributes:
        repo_root: Repository holding the vendored submodule.
        source_dir: Vendored libui source tree.
        out_dir: Build-output root, unique per invocation.
        build_dir: Meson build directory.
        artifact_dir: Where ninja leaves the compiled library.
    """

    repo_root: Path
    source_dir: Path
    out_dir: Path

    @property
    def build_dir(self) -> Path:
        return self.out_dir / "build"

    @property
    def artifact_dir(self) -> Path:
        return self.build_dir / "meson-out"

    @property
    def header(self) -> Path:
        return self.source_dir / "ui.h"

    @property
    def resource_dir(self) -> Path:
        return self.repo_root / "resources"

    @property
    def bindings_output(self) -> Path:
        return self.out_dir / "_libui.c"

    @classmethod
    def create(
        cls,
        out_dir: Path | str,
        source_dir: Path | str | None = None,
        repo_root: Path | str | None = None,
    ) -> BuildPaths:
        root = Path(repo_root) if repo_root is not None else Path.cwd()
        source = Path(source_dir) if source_dir is not None else root / "libui"
        return cls(
            repo_root=root.absolute(),
            source_dir=source.absolute(),
            out_dir=Path(out_dir).absolute(),
        )


def _flag(value: str | None) -> bool:
    return value is not None


@dataclass(frozen=True)
class BuildConfig:
    """Everything a build invocation needs to know up front.

    Attributes:
        target: Parsed target triple.
        link_mode: Static or dynamic, fixed for the invocation.
        paths: Directories for this invocation.
        windres: Explicit resource compiler override (WINDRES).
        detect_windres: False when DO_NOT_DETECT_WINDRES is set.
        tools: External tool commands.
    """

    target: TargetDescriptor
    link_mode: LinkMode
    paths: BuildPaths
    windres: str | None = None
    detect_windres: bool = True
    tools: ToolCommands = field(default_factory=ToolCommands)

    @classmethod
    def from_vars(
        cls,
        get_var: VarGetter,
        *,
        static_feature: bool = False,
        out_dir: Path | str | None = None,
    ) -> BuildConfig:
        """Resolve a configuration from build variables.

        Args:
            get_var: Variable lookup, usually uibuild.get_var.
            static_feature: The "static" feature flag (CLI --static).
            out_dir: Output directory overriding OUT_DIR.

        Raises:
            ConfigurationError: If no output directory is available.
        """
        out = out_dir if out_dir is not None else get_var("OUT_DIR")
        if not out:
            raise ConfigurationError(
                "OUT_DIR is not set; pass -o/--out-dir or OUT_DIR=<dir>"
            )

        triple = get_var("TARGET") or host_target_triple()
        link_mode = LinkMode.from_flags(
            _flag(get_var("LIBUI_STATIC_BUILD")),
            _flag(get_var("UIBUILD_FEATURE_STATIC")),
            static_feature,
        )

        defaults = ToolCommands()
        cpp = get_var("CPP")
        tools = ToolCommands(
            git=get_var("GIT") or defaults.git,
            meson=get_var("MESON") or defaults.meson,
            ninja=get_var("NINJA") or defaults.ninja,
            pkg_config=get_var("PKG_CONFIG") or defaults.pkg_config,
            preprocessor=tuple(cpp.split()) if cpp else defaults.preprocessor,
        )

        return cls(
            target=parse_target_triple(triple),
            link_mode=link_mode,
            paths=BuildPaths.create(out, source_dir=get_var("LIBUI_SOURCE_DIR")),
            windres=get_var("WINDRES"),
            detect_windres=get_var("DO_NOT_DETECT_WINDRES") is None,
            tools=tools,
        )

    @property
    def is_static(self) -> bool:
        return self.link_mode is LinkMode.STATIC

    def __repr__(self) -> str:
        return (
            f"BuildConfig(target={self.target.triple}, "
            f"link_mode={self.link_mode.value}, out_dir={self.paths.out_dir})"
        )
