# SPDX-License-Identifier: MIT
"""Post-build artifact fixups.

meson's output names do not always match what the host linker searches
for:

- With MSVC, the linker looks for ``ui.lib`` but meson writes ``libui.a``
  for static libraries (see mesonbuild/meson#1412).
- On Linux, meson writes ``libui.so.0`` while the linker searches for
  ``libui.so``.

Both fixups are idempotent.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from uibuild.configure.platform import LinkMode, TargetDescriptor
from uibuild.core.errors import ArtifactNotFoundError, FilesystemOperationError

logger = logging.getLogger(__name__)

LIBRARY_NAME = "ui"
STATIC_ARCHIVE = f"lib{LIBRARY_NAME}.a"
MSVC_STATIC_LIBRARY = f"{LIBRARY_NAME}.lib"
SHARED_OBJECT = f"lib{LIBRARY_NAME}.so"
DEFAULT_SOVERSION = "0"


def copy_msvc_static_archive(artifact_dir: Path) -> Path:
    """Copy libui.a to ui.lib.

    Returns:
        Path to the copied ui.lib.

    Raises:
        ArtifactNotFoundError: If libui.a was not produced.
        FilesystemOperationError: If the copy fails.
    """
    src = artifact_dir / STATIC_ARCHIVE
    dest = artifact_dir / MSVC_STATIC_LIBRARY
    if not src.is_file():
        raise ArtifactNotFoundError(src, "native build produced no static archive")
    try:
        shutil.copyfile(src, dest)
    except OSError as e:
        raise FilesystemOperationError("copy", src, e) from e
    logger.info("Copied %s to %s", src.name, dest.name)
    return dest


def find_versioned_shared_object(artifact_dir: Path) -> Path:
    """Find the version-suffixed shared object meson produced.

    Prefers ``libui.so.0`` and otherwise takes the least specific
    ``libui.so.*`` (the soname link rather than the full version).

    Raises:
        ArtifactNotFoundError: If there is no versioned shared object.
    """
    preferred = artifact_dir / f"{SHARED_OBJECT}.{DEFAULT_SOVERSION}"
    if preferred.exists():
        return preferred

    candidates = sorted(
        artifact_dir.glob(f"{SHARED_OBJECT}.*"),
        key=lambda p: (p.name.count("."), p.name),
    )
    if not candidates:
        raise ArtifactNotFoundError(
            artifact_dir / f"{SHARED_OBJECT}.{DEFAULT_SOVERSION}",
            "native build produced no versioned shared object",
        )
    return candidates[0]


def link_unversioned_shared_object(artifact_dir: Path) -> Path:
    """Point libui.so at the versioned shared object.

    A stale libui.so is replaced.

    Returns:
        Path to the libui.so symlink.

    Raises:
        ArtifactNotFoundError: If there is no versioned shared object.
        FilesystemOperationError: If removing or creating the link fails.
    """
    versioned = find_versioned_shared_object(artifact_dir)
    link = artifact_dir / SHARED_OBJECT

    try:
        link.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        raise FilesystemOperationError("remove", link, e) from e

    try:
        os.symlink(versioned.name, link)
    except OSError as e:
        raise FilesystemOperationError("symlink", link, e) from e
    logger.info("Linked %s -> %s", link.name, versioned.name)
    return link


def normalize_artifacts(
    target: TargetDescriptor, link_mode: LinkMode, artifact_dir: Path
) -> list[Path]:
    """Apply the fixups needed for this target and link mode.

    Returns:
        The paths created.
    """
    created: list[Path] = []
    if target.is_msvc and link_mode is LinkMode.STATIC:
        created.append(copy_msvc_static_archive(artifact_dir))
    if target.is_linux and link_mode is LinkMode.DYNAMIC:
        created.append(link_unversioned_shared_object(artifact_dir))
    return created
