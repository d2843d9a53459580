# SPDX-License-Identifier: MIT
"""Toolchain probes (Windows SDK, no-op)."""

from uibuild.toolchains.msvc import SdkInfo, WindowsSdkProbe, find_windows_sdk
from uibuild.toolchains.probe import NoopProbe, ToolchainProbe, select_probe

__all__ = [
    "ToolchainProbe",
    "NoopProbe",
    "WindowsSdkProbe",
    "SdkInfo",
    "find_windows_sdk",
    "select_probe",
]
