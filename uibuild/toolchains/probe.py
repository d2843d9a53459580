# SPDX-License-Identifier: MIT
"""Toolchain probe protocol and selection.

A probe resolves the resource compiler the native build needs. It is
selected once per invocation from the target and link mode.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from uibuild.configure.platform import LinkMode, is_windows_host

if TYPE_CHECKING:
    from uibuild.configure.config import BuildConfig
    from uibuild.configure.platform import TargetDescriptor

logger = logging.getLogger(__name__)


class ToolchainProbe(ABC):
    """Abstract base class for toolchain probes."""

    name: str = "probe"

    @abstractmethod
    def resolve_resource_compiler(self, config: BuildConfig) -> str | None:
        """Return the resource compiler to hand to the native build.

        Returns:
            The value for the WINDRES variable, or None to leave it unset.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class NoopProbe(ToolchainProbe):
    """Probe for targets that need no toolchain detection.

    An explicit WINDRES override is still passed through unchanged.
    """

    name = "noop"

    def resolve_resource_compiler(self, config: BuildConfig) -> str | None:
        return config.windres


def select_probe(target: TargetDescriptor, link_mode: LinkMode) -> ToolchainProbe:
    """Pick the probe for this invocation.

    SDK detection is only needed when building the shared library with
    an MSVC toolchain on a Windows host; everything else is a no-op.
    """
    if target.is_msvc and link_mode is LinkMode.DYNAMIC and is_windows_host():
        from uibuild.toolchains.msvc import WindowsSdkProbe

        probe: ToolchainProbe = WindowsSdkProbe()
    else:
        probe = NoopProbe()
    logger.debug("Selected %r for %s", probe, target.triple)
    return probe
