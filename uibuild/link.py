# SPDX-License-Identifier: MIT
"""Link planning.

The plan says where the host linker should look, which libui library to
link and how, and which system libraries a static libui drags in. It is
computed in full before anything is emitted, so a failed package query
never leaves a half-written set of directives behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from uibuild.builders.normalize import LIBRARY_NAME
from uibuild.configure.platform import LinkMode, TargetDescriptor
from uibuild.packages.pkgconfig import PackageInfo

# Libraries a static libui needs from the Windows GUI subsystem
# TODO: read these from meson's introspection data instead.
WINDOWS_SYSTEM_LIBRARIES: tuple[str, ...] = (
    "user32",
    "kernel32",
    "gdi32",
    "comctl32",
    "uxtheme",
    "msimg32",
    "comdlg32",
    "d2d1",
    "dwrite",
    "ole32",
    "oleaut32",
    "oleacc",
    "uuid",
    "windowscodecs",
)

GTK_PACKAGE = "gtk+-3.0"
GTK_MIN_VERSION = "3.10.0"

# meson names the MSVC import library after the full "libui" target name
MSVC_SHARED_LIBRARY_NAME = "libui"

STATIC = "static"
DYLIB = "dylib"


class PackageQuery(Protocol):
    def probe(self, name: str, min_version: str) -> PackageInfo: ...


@dataclass(frozen=True)
class LinkLibrary:
    name: str
    kind: str

    def directive(self) -> str:
        return f"link-lib={self.kind}={self.name}"


@dataclass(frozen=True)
class LinkPlan:
    """Link directives for the host build.

    Attributes:
        search_paths: Ordered (directory, kind) pairs.
        library: The libui library to link.
        auxiliary: System libraries, always linked dynamically.
    """

    search_paths: list[tuple[Path, str]]
    library: LinkLibrary
    auxiliary: list[LinkLibrary] = field(default_factory=list)

    def directives(self) -> list[str]:
        lines = [f"link-search={kind}={path}" for path, kind in self.search_paths]
        lines.append(self.library.directive())
        lines.extend(lib.directive() for lib in self.auxiliary)
        return lines

    def extension_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for a setuptools/cffi Extension."""
        return {
            "library_dirs": [str(path) for path, _ in self.search_paths],
            "libraries": [self.library.name] + [lib.name for lib in self.auxiliary],
        }


def plan(
    target: TargetDescriptor,
    link_mode: LinkMode,
    artifact_dir: Path,
    package_query: PackageQuery | None = None,
) -> LinkPlan:
    """Work out the link directives for a target and link mode.

    Args:
        target: Target being built.
        link_mode: Static or dynamic libui.
        artifact_dir: Directory holding the built library.
        package_query: Used to find GTK for static Linux builds.

    Raises:
        SystemPackageNotFoundError: If GTK is missing for a static Linux build.
        ValueError: If a static Linux plan is requested without a package query.
    """
    static = link_mode is LinkMode.STATIC
    search_paths: list[tuple[Path, str]] = [(artifact_dir, "native")]

    if target.is_msvc and not static:
        name = MSVC_SHARED_LIBRARY_NAME
    else:
        name = LIBRARY_NAME
    library = LinkLibrary(name, STATIC if static else DYLIB)

    auxiliary: list[LinkLibrary] = []
    if static:
        if target.is_windows or target.is_msvc:
            auxiliary = [LinkLibrary(dep, DYLIB) for dep in WINDOWS_SYSTEM_LIBRARIES]
        elif target.is_linux:
            if package_query is None:
                raise ValueError("static Linux builds need a package query")
            gtk = package_query.probe(GTK_PACKAGE, GTK_MIN_VERSION)
            search_paths.extend((Path(d), "native") for d in gtk.library_dirs)
            auxiliary = [LinkLibrary(lib, DYLIB) for lib in gtk.libraries]

    return LinkPlan(search_paths=search_paths, library=library, auxiliary=auxiliary)
