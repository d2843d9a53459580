# SPDX-License-Identifier: MIT
"""Target and host platform detection.

A TargetDescriptor is derived once per invocation from a target triple
such as ``x86_64-pc-windows-msvc`` and never mutated.
"""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from enum import Enum


class OsFamily(Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"
    OTHER = "other"


class AbiFamily(Enum):
    MSVC = "msvc"
    GNU = "gnu"


class LinkMode(Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"

    @property
    def meson_library_kind(self) -> str:
        """Value for meson's --default-library option."""
        return "static" if self is LinkMode.STATIC else "shared"

    @classmethod
    def from_flags(cls, *flags: bool) -> LinkMode:
        """Static if any trigger flag is set, dynamic otherwise."""
        return cls.STATIC if any(flags) else cls.DYNAMIC


# Normalize architecture names to the two spellings the Windows SDK uses
# plus the common ones for everything else.
_ARCH_ALIASES: dict[str, str] = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "i386": "x86",
    "i586": "x86",
    "i686": "x86",
    "arm64": "aarch64",
}


@dataclass(frozen=True)
class TargetDescriptor:
    """Facts about the compilation target.

    Attributes:
        triple: The original target triple.
        os: Operating system family.
        abi: ABI/toolchain family.
        arch: Normalized CPU architecture (x86_64, x86, aarch64, ...).
    """

    triple: str
    os: OsFamily
    abi: AbiFamily
    arch: str

    @property
    def is_windows(self) -> bool:
        return self.os is OsFamily.WINDOWS

    @property
    def is_linux(self) -> bool:
        return self.os is OsFamily.LINUX

    @property
    def is_macos(self) -> bool:
        return self.os is OsFamily.MACOS

    @property
    def is_msvc(self) -> bool:
        return self.abi is AbiFamily.MSVC


def parse_target_triple(triple: str) -> TargetDescriptor:
    """Parse a target triple into a TargetDescriptor.

    Examples:
        >>> t = parse_target_triple("x86_64-pc-windows-msvc")
        >>> t.os, t.abi, t.arch
        (<OsFamily.WINDOWS: 'windows'>, <AbiFamily.MSVC: 'msvc'>, 'x86_64')
    """
    triple = triple.strip()
    parts = triple.split("-")
    arch = _ARCH_ALIASES.get(parts[0].lower(), parts[0].lower())

    lowered = triple.lower()
    if "windows" in lowered:
        os_family = OsFamily.WINDOWS
    elif "linux" in lowered:
        os_family = OsFamily.LINUX
    elif "darwin" in lowered or "apple" in lowered or "macos" in lowered:
        os_family = OsFamily.MACOS
    else:
        os_family = OsFamily.OTHER

    abi = AbiFamily.MSVC if "msvc" in lowered else AbiFamily.GNU
    return TargetDescriptor(triple=triple, os=os_family, abi=abi, arch=arch)


def is_windows_host() -> bool:
    return sys.platform == "win32"


def host_target_triple() -> str:
    """Best-effort target triple for the machine running uibuild."""
    machine = platform.machine().lower() or "unknown"
    arch = _ARCH_ALIASES.get(machine, machine)
    if sys.platform == "win32":
        return f"{arch}-pc-windows-msvc"
    if sys.platform == "darwin":
        return f"{arch}-apple-darwin"
    if sys.platform.startswith("linux"):
        return f"{arch}-unknown-linux-gnu"
    return f"{arch}-unknown-{sys.platform}"
