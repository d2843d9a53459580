# SPDX-License-Identifier: MIT
"""Shared fixtures for uibuild tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from uibuild.core.errors import ExternalProcessError
from uibuild.util.commands import Command, ProcessResult, ProcessRunner

Handler = Callable[[Command], "ProcessResult | None"]


class FakeRunner(ProcessRunner):
    """Records commands instead of running them.

    Handlers are keyed by program name. A handler may return a
    ProcessResult, return None for an empty success, or raise.
    """

    def __init__(self) -> None:
        self.commands: list[Command] = []
        self._handlers: dict[str, Handler] = {}

    def on(self, program: str, handler: Handler) -> None:
        self._handlers[program] = handler

    def fail(
        self, program: str, stderr: str = "", stdout: str = "", code: int = 1
    ) -> None:
        def handler(command: Command) -> ProcessResult:
            raise ExternalProcessError(
                command.command_line(), stdout=stdout, stderr=stderr, returncode=code
            )

        self.on(program, handler)

    def output(self, program: str, stdout: str) -> None:
        self.on(program, lambda command: ProcessResult(0, stdout))

    def run(self, command: Command) -> ProcessResult:
        self.commands.append(command)
        handler = self._handlers.get(command.program)
        if handler is None:
            return ProcessResult(0)
        result = handler(command)
        return result if result is not None else ProcessResult(0)

    def programs(self) -> list[str]:
        return [c.program for c in self.commands]


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def libui_tree(tmp_path: Path) -> Path:
    """A minimal checked-out libui source tree."""
    source = tmp_path / "libui"
    source.mkdir()
    (source / "meson.build").write_text("project('libui', 'c')\n")
    (source / "ui.h").write_text(
        "#include <stddef.h>\n"
        "#include <stdint.h>\n"
        "typedef struct uiInitOptions uiInitOptions;\n"
        "struct uiInitOptions { size_t Size; };\n"
        "extern const char *uiInit(uiInitOptions *options);\n"
        "extern void uiMain(void);\n"
        "extern void uiQuit(void);\n"
    )
    return source
