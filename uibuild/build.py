# SPDX-License-Identifier: MIT
"""The full build pipeline.

Steps run strictly in order and each runs to completion before the next
starts:

    prepare source -> generate bindings -> resolve toolchain ->
    meson/ninja -> normalize artifacts -> plan link -> embed resources

Any UibuildError aborts the run; the error is tagged with the step that
raised it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from uibuild.bindings import generate_bindings
from uibuild.builders.meson import MesonDriver
from uibuild.builders.normalize import normalize_artifacts
from uibuild.builders.resource import EmbeddedResource, ResourceEmbedder
from uibuild.configure.config import BuildConfig
from uibuild.core.errors import UibuildError
from uibuild.link import LinkPlan, plan
from uibuild.packages.pkgconfig import PkgConfig
from uibuild.source import prepare_source
from uibuild.toolchains.probe import select_probe
from uibuild.util.commands import ProcessRunner

logger = logging.getLogger(__name__)

DIRECTIVE_PREFIX = "uibuild:"


@contextmanager
def build_step(name: str) -> Iterator[None]:
    logger.debug("Step: %s", name)
    try:
        yield
    except UibuildError as e:
        if e.step is None:
            e.step = name
        raise


@dataclass(frozen=True)
class BuildResult:
    """Everything the host build consumes from one run."""

    plan: LinkPlan
    bindings: Path
    resource: EmbeddedResource | None = None

    def directives(self) -> list[str]:
        lines = self.plan.directives()
        if self.resource is not None:
            lines.append(self.resource.directive())
        return lines


def emit_directives(lines: list[str], stream: TextIO | None = None) -> None:
    out = stream if stream is not None else sys.stdout
    for line in lines:
        print(f"{DIRECTIVE_PREFIX}{line}", file=out)
    out.flush()


def plan_link(config: BuildConfig, runner: ProcessRunner) -> LinkPlan:
    """Compute the link plan for config without building anything."""
    with build_step("plan link"):
        return plan(
            config.target,
            config.link_mode,
            config.paths.artifact_dir,
            PkgConfig(runner, cmd=config.tools.pkg_config),
        )


def build_bindings(config: BuildConfig, runner: ProcessRunner) -> Path:
    """Prepare the source tree and generate the cffi binding source."""
    paths = config.paths
    with build_step("prepare source"):
        prepare_source(
            paths.source_dir, paths.repo_root, runner, git=config.tools.git
        )
    with build_step("generate bindings"):
        return generate_bindings(
            paths.header,
            paths.bindings_output,
            runner,
            preprocessor=config.tools.preprocessor,
        )


def run_build(
    config: BuildConfig,
    runner: ProcessRunner | None = None,
    *,
    resource_dir: Path | None = None,
) -> BuildResult:
    """Run the whole pipeline for config.

    Args:
        config: Resolved build configuration.
        runner: Process runner (a real one by default).
        resource_dir: Directory with the .rc scripts (default: resources/).

    Returns:
        The link plan, bindings path and embedded resource.

    Raises:
        UibuildError: On any failure; ``step`` names the failing step.
    """
    runner = runner or ProcessRunner()
    paths = config.paths
    logger.info("Building libui for %r", config)

    bindings = build_bindings(config, runner)

    with build_step("resolve toolchain"):
        probe = select_probe(config.target, config.link_mode)
        windres = probe.resolve_resource_compiler(config)

    with build_step("native build"):
        driver = MesonDriver(
            runner, meson=config.tools.meson, ninja=config.tools.ninja
        )
        driver.configure_if_needed(
            paths.source_dir, paths.build_dir, config.link_mode, windres
        )
        driver.compile(paths.build_dir)

    with build_step("normalize artifacts"):
        normalize_artifacts(config.target, config.link_mode, paths.artifact_dir)

    link_plan = plan_link(config, runner)

    with build_step("embed resources"):
        embedder = ResourceEmbedder(runner, windres=config.windres or "windres")
        resource = embedder.embed(
            config.target,
            config.link_mode,
            resource_dir if resource_dir is not None else paths.resource_dir,
            paths.out_dir,
            rc=windres,
        )

    return BuildResult(plan=link_plan, bindings=bindings, resource=resource)
