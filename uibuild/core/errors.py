# SPDX-License-Identifier: MIT
"""Custom exceptions for uibuild.

All uibuild exceptions inherit from UibuildError. Every one of them is
fatal: the top-level handler in uibuild.cli reports the failing step and
aborts the invocation.
"""

from __future__ import annotations

from pathlib import Path


class UibuildError(Exception):
    """Base class for all uibuild exceptions.

    Attributes:
        message: The error message.
        step: The build step that failed, set by uibuild.build.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        self.step: str | None = None
        super().__init__(message)


class ConfigurationError(UibuildError):
    """Build variables are missing or invalid."""


class SourceUnavailableError(UibuildError):
    """Vendored source file is missing after source preparation.

    Attributes:
        path: The path that was expected to exist.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(
            f"vendored source not found: {path} "
            "(run 'git submodule update --init --recursive')"
        )


class ToolchainDetectionError(UibuildError):
    """A required SDK or resource compiler could not be located."""


class ExternalProcessError(UibuildError):
    """An external tool could not be run or exited non-zero.

    Output is decoded with replacement characters, so non-UTF-8 output
    (common with localized Windows toolchains) may not render exactly.

    Attributes:
        command_line: The rendered command line that was invoked.
        stdout: Captured standard output.
        stderr: Captured standard error.
        returncode: Exit status, or None if the process never started.
    """

    def __init__(
        self,
        command_line: str,
        stdout: str = "",
        stderr: str = "",
        returncode: int | None = None,
    ) -> None:
        self.command_line = command_line
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        if returncode is None:
            head = f"unable to invoke {command_line}"
        else:
            head = f"{command_line} invocation failed (exit status {returncode})"
        super().__init__(f"{head}:\n{stdout}\n{stderr}")


class ArtifactNotFoundError(UibuildError):
    """An expected build artifact is absent.

    Attributes:
        path: The artifact that was expected.
    """

    def __init__(self, path: Path | str, detail: str = "") -> None:
        self.path = Path(path)
        message = f"build artifact not found: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class FilesystemOperationError(UibuildError):
    """A copy, remove or symlink operation failed.

    Attributes:
        operation: Short name of the operation ("copy", "remove", "symlink").
        path: The path the operation was applied to.
    """

    def __init__(self, operation: str, path: Path | str, cause: OSError) -> None:
        self.operation = operation
        self.path = Path(path)
        super().__init__(f"unable to {operation} {path}: {cause}")


class BindingGenerationError(UibuildError):
    """The header could not be turned into binding source."""


class SystemPackageNotFoundError(UibuildError):
    """A required system package is absent or too old.

    Attributes:
        package: The pkg-config package name.
        min_version: The minimum acceptable version.
    """

    def __init__(self, package: str, min_version: str, detail: str = "") -> None:
        self.package = package
        self.min_version = min_version
        message = f"system package {package} >= {min_version} not found"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
