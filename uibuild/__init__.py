# SPDX-License-Identifier: MIT
"""
uibuild: build-time orchestration for the vendored libui GUI toolkit.

uibuild checks out libui, drives its meson/ninja build, generates a cffi
binding source for ``ui.h`` and emits the link directives a host build
needs for the chosen target and link mode.
"""

from __future__ import annotations

import os

__version__ = "0.1.0"

# Internal storage for CLI variables
_cli_vars: dict[str, str] = {}


def set_cli_vars(variables: dict[str, str]) -> None:
    """Install KEY=value variables parsed from the command line."""
    global _cli_vars
    _cli_vars = dict(variables)


def get_var(name: str, default: str | None = None) -> str | None:
    """Get a build variable set on the command line or from environment.

    Variables can be set when invoking uibuild:
        uibuild build TARGET=x86_64-pc-windows-msvc OUT_DIR=out

    Precedence (highest to lowest):
        1. Command line: uibuild VAR=value
        2. Environment variable: VAR=value uibuild

    Args:
        name: Variable name.
        default: Default value if not set.

    Returns:
        The variable value, or default if not set.
    """
    if name in _cli_vars:
        return _cli_vars[name]

    return os.environ.get(name, default)


from uibuild.build import run_build  # noqa: E402
from uibuild.configure.config import BuildConfig  # noqa: E402
from uibuild.link import LinkPlan, plan  # noqa: E402

__all__ = [
    "__version__",
    "get_var",
    "set_cli_vars",
    "BuildConfig",
    "LinkPlan",
    "plan",
    "run_build",
]
