# SPDX-License-Identifier: MIT
"""Build steps run against the vendored libui tree."""

from uibuild.builders.meson import MesonDriver, is_configured
from uibuild.builders.normalize import normalize_artifacts
from uibuild.builders.resource import EmbeddedResource, ResourceEmbedder

__all__ = [
    "MesonDriver",
    "is_configured",
    "normalize_artifacts",
    "EmbeddedResource",
    "ResourceEmbedder",
]
