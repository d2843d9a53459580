# SPDX-License-Identifier: MIT
"""External process invocation for uibuild.

Every tool uibuild shells out to (git, meson, ninja, pkg-config, the C
preprocessor, rc.exe/windres) is described by a Command value and run
through a ProcessRunner. Components take the runner as a parameter so
tests can substitute a fake one.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from uibuild.core.errors import ExternalProcessError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """A single external process invocation.

    Attributes:
        program: Executable name or path.
        args: Arguments after the program.
        cwd: Working directory, or None for the current one.
        env: Variables added to the inherited environment.
    """

    program: str
    args: tuple[str, ...] = ()
    cwd: Path | None = None
    env: dict[str, str] = field(default_factory=dict)

    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def command_line(self) -> str:
        """Render the command line for logs and error messages."""
        line = shlex.join(self.argv())
        if self.env:
            assigns = " ".join(f"{k}={shlex.quote(v)}" for k, v in self.env.items())
            line = f"{assigns} {line}"
        if self.cwd is not None:
            line = f"(cd {shlex.quote(str(self.cwd))} && {line})"
        return line


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a successful process run."""

    returncode: int
    stdout: str = ""
    stderr: str = ""


class ProcessRunner:
    """Runs Commands as blocking subprocesses.

    No timeout is imposed; the invoking build orchestrator owns
    cancellation.
    """

    def run(self, command: Command) -> ProcessResult:
        """Run a command and capture its output.

        Raises:
            ExternalProcessError: If the process cannot be started or
                exits with a non-zero status.
        """
        logger.info("Running: %s", command.command_line())

        env = None
        if command.env:
            env = os.environ.copy()
            env.update(command.env)

        try:
            result = subprocess.run(
                command.argv(),
                cwd=command.cwd,
                env=env,
                capture_output=True,
            )
        except OSError as e:
            raise ExternalProcessError(
                command.command_line(), stderr=str(e)
            ) from e

        stdout = result.stdout.decode("utf-8", errors="replace")
        stderr = result.stderr.decode("utf-8", errors="replace")
        if result.returncode != 0:
            raise ExternalProcessError(
                command.command_line(),
                stdout=stdout,
                stderr=stderr,
                returncode=result.returncode,
            )
        return ProcessResult(result.returncode, stdout, stderr)
