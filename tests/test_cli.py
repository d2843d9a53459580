# SPDX-License-Identifier: MIT
"""Tests for uibuild CLI."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

import pytest

import uibuild
from uibuild.build import BuildResult
from uibuild.cli import main, parse_variables, setup_logging
from uibuild.core.errors import SystemPackageNotFoundError
from uibuild.link import LinkLibrary, LinkPlan

BUILD_VARS = (
    "TARGET",
    "OUT_DIR",
    "LIBUI_STATIC_BUILD",
    "UIBUILD_FEATURE_STATIC",
)


@pytest.fixture(autouse=True)
def clean_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in BUILD_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(uibuild, "_cli_vars", {})


def fake_result(tmp_path: Path) -> BuildResult:
    return BuildResult(
        plan=LinkPlan([(tmp_path, "native")], LinkLibrary("ui", "dylib")),
        bindings=tmp_path / "_libui.c",
    )


class TestParseVariables:
    """Tests for parse_variables function."""

    def test_splits_variables(self) -> None:
        variables, remaining = parse_variables(
            ["TARGET=x86_64-pc-windows-msvc", "extra", "OUT_DIR=a=b"]
        )
        assert variables == {"TARGET": "x86_64-pc-windows-msvc", "OUT_DIR": "a=b"}
        assert remaining == ["extra"]

    def test_options_and_empty_keys_are_not_variables(self) -> None:
        variables, remaining = parse_variables(["--opt=1", "=value"])
        assert variables == {}
        assert remaining == ["--opt=1", "=value"]


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_normal(self) -> None:
        setup_logging(verbose=False, debug=False)

    def test_setup_logging_verbose(self) -> None:
        setup_logging(verbose=True, debug=False)

    def test_setup_logging_debug(self) -> None:
        setup_logging(verbose=False, debug=True)


class TestGetVar:
    """Tests for uibuild.get_var precedence."""

    def test_cli_overrides_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("TARGET", "env-triple")
        uibuild.set_cli_vars({"TARGET": "cli-triple"})
        assert uibuild.get_var("TARGET") == "cli-triple"

    def test_environment_and_default(self, monkeypatch) -> None:
        monkeypatch.setenv("TARGET", "env-triple")
        assert uibuild.get_var("TARGET") == "env-triple"
        assert uibuild.get_var("OUT_DIR", "fallback") == "fallback"


class TestMain:
    """Tests for in-process CLI commands."""

    def test_build_prints_directives(self, tmp_path, monkeypatch, capsys) -> None:
        seen = {}

        def fake_run_build(config):
            seen["config"] = config
            return fake_result(tmp_path)

        monkeypatch.setattr("uibuild.build.run_build", fake_run_build)
        code = main(
            ["-o", str(tmp_path), "TARGET=x86_64-pc-windows-msvc", "--static"]
        )

        assert code == 0
        config = seen["config"]
        assert config.target.is_msvc
        assert config.is_static
        assert config.paths.out_dir == tmp_path
        assert capsys.readouterr().out.splitlines() == [
            f"uibuild:link-search=native={tmp_path}",
            "uibuild:link-lib=dylib=ui",
        ]

    def test_missing_out_dir(self, capsys, caplog) -> None:
        with caplog.at_level(logging.ERROR, logger="uibuild"):
            assert main(["build"]) == 1
        assert "OUT_DIR" in caplog.text
        assert capsys.readouterr().out == ""

    def test_failure_emits_nothing(self, tmp_path, monkeypatch, capsys, caplog):
        def failing_run_build(config):
            err = SystemPackageNotFoundError("gtk+-3.0", "3.10.0")
            err.step = "plan link"
            raise err

        monkeypatch.setattr("uibuild.build.run_build", failing_run_build)
        with caplog.at_level(logging.ERROR, logger="uibuild"):
            code = main(["build", f"OUT_DIR={tmp_path}"])

        assert code == 1
        assert "plan link failed: system package gtk+-3.0" in caplog.text
        assert capsys.readouterr().out == ""

    def test_plan(self, tmp_path, capsys) -> None:
        code = main(["plan", "-o", str(tmp_path), "TARGET=x86_64-pc-windows-gnu"])
        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            f"uibuild:link-search=native={tmp_path / 'build' / 'meson-out'}",
            "uibuild:link-lib=dylib=ui",
        ]

    def test_plan_static_windows(self, tmp_path, capsys) -> None:
        code = main(
            ["plan", "--static", "-o", str(tmp_path), "TARGET=x86_64-pc-windows-gnu"]
        )
        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert "uibuild:link-lib=static=ui" in lines
        assert len(lines) == 16

    def test_clean(self, tmp_path) -> None:
        build_dir = tmp_path / "build"
        build_dir.mkdir()
        (build_dir / "build.ninja").write_text("")
        (tmp_path / "_libui.c").write_text("")

        assert main(["clean", "-o", str(tmp_path)]) == 0
        assert not build_dir.exists()
        assert (tmp_path / "_libui.c").exists()

    def test_clean_all(self, tmp_path) -> None:
        out = tmp_path / "out"
        (out / "build").mkdir(parents=True)

        assert main(["clean", "--all", "-o", str(out)]) == 0
        assert not out.exists()

    def test_clean_nothing(self, tmp_path) -> None:
        assert main(["clean", "-o", str(tmp_path / "missing")]) == 0

    def test_clean_all_refuses_repository(self, tmp_path, monkeypatch, caplog):
        repo = tmp_path / "repo"
        (repo / "libui").mkdir(parents=True)
        monkeypatch.chdir(repo)

        for out in (".", str(tmp_path)):
            with caplog.at_level(logging.ERROR, logger="uibuild"):
                assert main(["clean", "--all", "-o", out]) == 1
        assert (repo / "libui").is_dir()
        assert "refusing to remove" in caplog.text


class TestCLICommands:
    """Tests for the installed entry point."""

    def test_uibuild_help(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "uibuild", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        for command in ("build", "plan", "bindings", "clean"):
            assert command in result.stdout

    def test_uibuild_version(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "uibuild", "--version"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert uibuild.__version__ in result.stdout
