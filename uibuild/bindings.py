# SPDX-License-Identifier: MIT
"""cffi binding generation for ui.h.

The header is preprocessed so libui's declaration macros (``_UI_EXTERN``,
``_UI_ENUM``) are expanded, then fed to cffi. cffi emits a C source for
an out-of-line API module which the host build compiles and links
against libui.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from cffi import CDefError, FFI, FFIError, VerificationError

from uibuild.core.errors import BindingGenerationError, ExternalProcessError
from uibuild.source import require_source_file
from uibuild.util.commands import Command, ProcessRunner

logger = logging.getLogger(__name__)

DEFAULT_MODULE_NAME = "_libui"

# cffi provides the standard C types itself
_INCLUDE_RE = re.compile(r"^\s*#\s*include\b.*$", re.MULTILINE)


def strip_includes(text: str) -> str:
    return _INCLUDE_RE.sub("", text)


def preprocess_header(
    header: Path,
    scratch: Path,
    runner: ProcessRunner,
    preprocessor: tuple[str, ...] = ("cc", "-E", "-P"),
) -> str:
    """Run the C preprocessor over header with its #includes removed.

    Args:
        header: The public header.
        scratch: Where to write the include-free copy.
        runner: Process runner.
        preprocessor: Preprocessor command, without the input file.

    Returns:
        The preprocessed declarations.
    """
    scratch.parent.mkdir(parents=True, exist_ok=True)
    scratch.write_text(strip_includes(header.read_text(encoding="utf-8")))
    program, *args = preprocessor
    result = runner.run(Command(program, (*args, str(scratch))))
    return result.stdout


def generate_bindings(
    header: Path,
    output: Path,
    runner: ProcessRunner,
    *,
    preprocessor: tuple[str, ...] = ("cc", "-E", "-P"),
    module_name: str = DEFAULT_MODULE_NAME,
) -> Path:
    """Generate the cffi C source for header and write it to output.

    Returns:
        The path written.

    Raises:
        SourceUnavailableError: If the header is missing.
        BindingGenerationError: If preprocessing or parsing fails.
    """
    require_source_file(header)
    scratch = output.with_name(f"{module_name}_cdef.h")

    try:
        declarations = preprocess_header(header, scratch, runner, preprocessor)
    except ExternalProcessError as e:
        raise BindingGenerationError(
            f"preprocessing {header} failed:\n{e.message}"
        ) from e

    ffi = FFI()
    try:
        ffi.cdef(declarations)
        ffi.set_source(
            module_name,
            f'#include "{header.name}"',
            include_dirs=[str(header.parent)],
        )
        output.parent.mkdir(parents=True, exist_ok=True)
        ffi.emit_c_code(str(output))
    except (CDefError, FFIError, VerificationError) as e:
        raise BindingGenerationError(
            f"unable to generate bindings for {header}: {e}"
        ) from e

    logger.info("Wrote bindings for %s to %s", header.name, output)
    return output
