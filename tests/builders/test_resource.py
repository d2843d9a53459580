# SPDX-License-Identifier: MIT
"""Tests for uibuild.builders.resource."""

from pathlib import Path

import pytest

from uibuild.builders.resource import ResourceEmbedder, resource_script_name
from uibuild.configure.platform import LinkMode, parse_target_triple
from uibuild.core.errors import ExternalProcessError, SourceUnavailableError

MSVC = parse_target_triple("x86_64-pc-windows-msvc")
GNU = parse_target_triple("x86_64-pc-windows-gnu")
LINUX = parse_target_triple("x86_64-unknown-linux-gnu")


@pytest.fixture
def resource_dir(tmp_path: Path) -> Path:
    res = tmp_path / "resources"
    res.mkdir()
    (res / "shared_resources.rc").write_text('1 24 "libui.manifest"\n')
    (res / "static_resources.rc").write_text('1 24 "libui.manifest"\n')
    return res


class TestResourceScriptName:
    def test_selected_by_link_mode(self):
        assert resource_script_name(LinkMode.DYNAMIC) == "shared_resources.rc"
        assert resource_script_name(LinkMode.STATIC) == "static_resources.rc"


class TestResourceEmbedder:
    def test_msvc_uses_rc(self, runner, resource_dir, tmp_path):
        out = tmp_path / "out"
        resource = ResourceEmbedder(runner).embed(
            MSVC, LinkMode.DYNAMIC, resource_dir, out, rc='"C:/Kits/bin/x64/rc.exe"'
        )
        assert resource is not None
        assert resource.path == out / "resources" / "shared_resources.res"
        assert resource.directive() == f"link-arg={resource.path}"
        cmd = runner.commands[0]
        assert cmd.program == "C:/Kits/bin/x64/rc.exe"
        assert cmd.args == (
            "/nologo",
            f"/fo{resource.path}",
            str(resource_dir / "shared_resources.rc"),
        )

    def test_msvc_default_rc(self, runner, resource_dir, tmp_path):
        ResourceEmbedder(runner).embed(MSVC, LinkMode.STATIC, resource_dir, tmp_path)
        assert runner.commands[0].program == "rc.exe"
        assert str(resource_dir / "static_resources.rc") in runner.commands[0].args

    def test_gnu_uses_windres(self, runner, resource_dir, tmp_path):
        resource = ResourceEmbedder(runner, windres="x86_64-w64-mingw32-windres").embed(
            GNU, LinkMode.STATIC, resource_dir, tmp_path
        )
        assert resource is not None
        assert resource.path.name == "static_resources.res.o"
        cmd = runner.commands[0]
        assert cmd.program == "x86_64-w64-mingw32-windres"
        assert "--output-format=coff" in cmd.args

    def test_non_windows_is_noop(self, runner, tmp_path):
        assert ResourceEmbedder(runner).embed(
            LINUX, LinkMode.DYNAMIC, tmp_path / "missing", tmp_path
        ) is None
        assert runner.commands == []

    def test_missing_script(self, runner, tmp_path):
        with pytest.raises(SourceUnavailableError):
            ResourceEmbedder(runner).embed(MSVC, LinkMode.DYNAMIC, tmp_path, tmp_path)

    def test_compiler_failure_is_fatal(self, runner, resource_dir, tmp_path):
        runner.fail("rc.exe", stderr="RC1015: cannot open include file")
        with pytest.raises(ExternalProcessError, match="RC1015"):
            ResourceEmbedder(runner).embed(MSVC, LinkMode.DYNAMIC, resource_dir, tmp_path)
