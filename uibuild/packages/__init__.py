# SPDX-License-Identifier: MIT
"""System package discovery."""

from uibuild.packages.pkgconfig import PackageInfo, PkgConfig

__all__ = ["PackageInfo", "PkgConfig"]
