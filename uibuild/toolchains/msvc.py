# SPDX-License-Identifier: MIT
"""Windows SDK discovery for MSVC targets (Windows only).

meson needs a resource compiler to build libui's shared library with
MSVC. rc.exe ships with the Windows SDK rather than with the compiler,
so it is located from the SDK installation folder.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from uibuild.core.errors import ToolchainDetectionError
from uibuild.toolchains.probe import ToolchainProbe

if TYPE_CHECKING:
    from uibuild.configure.config import BuildConfig

logger = logging.getLogger(__name__)

# Registry locations of installed SDKs, newest first
_SDK_REGISTRY_KEYS = (
    ("v10.0", r"SOFTWARE\Microsoft\Microsoft SDKs\Windows\v10.0"),
    ("v8.1", r"SOFTWARE\Microsoft\Microsoft SDKs\Windows\v8.1"),
)

# Target arch -> SDK bin subdirectory
SDK_ARCH_DIRS: dict[str, str] = {
    "x86_64": "x64",
    "x86": "x86",
}


@dataclass(frozen=True)
class SdkInfo:
    """An installed Windows SDK.

    Attributes:
        installation_folder: SDK root (e.g. C:\\Program Files (x86)\\Windows Kits\\10).
        version: Product version string, if known.
    """

    installation_folder: Path
    version: str | None = None


def _find_sdk_in_registry() -> SdkInfo | None:
    import winreg

    for label, subkey in _SDK_REGISTRY_KEYS:
        for view in (winreg.KEY_WOW64_32KEY, winreg.KEY_WOW64_64KEY):
            try:
                with winreg.OpenKey(
                    winreg.HKEY_LOCAL_MACHINE, subkey, 0, winreg.KEY_READ | view
                ) as key:
                    folder, _ = winreg.QueryValueEx(key, "InstallationFolder")
                    try:
                        version, _ = winreg.QueryValueEx(key, "ProductVersion")
                    except OSError:
                        version = label
            except OSError:
                continue
            if folder and Path(folder).is_dir():
                return SdkInfo(Path(folder), version)
    return None


def _find_sdk_in_program_files() -> SdkInfo | None:
    program_files_x86 = os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")
    kits = Path(program_files_x86) / "Windows Kits"
    for version in ("10", "8.1"):
        folder = kits / version
        if (folder / "bin").is_dir():
            return SdkInfo(folder, version)
    return None


def find_windows_sdk() -> SdkInfo | None:
    """Find the newest installed Windows SDK.

    Checks the registry first, then the default install location.

    Returns:
        SdkInfo if an SDK was found, None otherwise.
    """
    try:
        sdk = _find_sdk_in_registry()
    except ImportError:
        sdk = None
    if sdk is None:
        sdk = _find_sdk_in_program_files()
    return sdk


def resource_compiler_path(sdk: SdkInfo, arch: str) -> Path:
    """Return rc.exe for the given target arch inside an SDK.

    Windows 10 SDKs keep tools in versioned ``bin/<version>/<arch>``
    directories; older ones use a flat ``bin/<arch>`` layout.

    Raises:
        ToolchainDetectionError: If the arch has no resource compiler.
    """
    arch_dir = SDK_ARCH_DIRS.get(arch)
    if arch_dir is None:
        raise ToolchainDetectionError(
            f"unsupported target architecture for rc.exe: {arch}"
        )

    bin_dir = sdk.installation_folder / "bin"
    if bin_dir.is_dir():
        versioned = sorted(
            (p for p in bin_dir.iterdir() if p.is_dir() and p.name[:1].isdigit()),
            key=lambda p: tuple(int(x) for x in p.name.split(".") if x.isdigit()),
            reverse=True,
        )
        for version_dir in versioned:
            candidate = version_dir / arch_dir / "rc.exe"
            if candidate.exists():
                return candidate
    return bin_dir / arch_dir / "rc.exe"


class WindowsSdkProbe(ToolchainProbe):
    """Locate rc.exe from the installed Windows SDK.

    An externally set WINDRES always wins. Otherwise detection runs
    unless DO_NOT_DETECT_WINDRES is set.
    """

    name = "windows-sdk"

    def __init__(
        self, find_sdk: Callable[[], SdkInfo | None] = find_windows_sdk
    ) -> None:
        self._find_sdk = find_sdk

    def resolve_resource_compiler(self, config: BuildConfig) -> str | None:
        if config.windres is not None:
            return config.windres
        if not config.detect_windres:
            logger.info("Resource compiler detection disabled")
            return None

        sdk = self._find_sdk()
        if sdk is None:
            raise ToolchainDetectionError(
                "no Windows SDK found; install one, set WINDRES to rc.exe, "
                "or set DO_NOT_DETECT_WINDRES"
            )

        rc = resource_compiler_path(sdk, config.target.arch)
        logger.info("Using resource compiler %s (SDK %s)", rc, sdk.version)
        # meson splits WINDRES on whitespace, so quote paths with spaces
        return f'"{rc}"'
