"""Output assembly for the name-list and bundle modes.

Both modes walk the sorted buckets in emission order (lower, unordered,
upper) and stream into an OutputBuffer. The name-list mode writes only
filenames; the bundle mode concatenates the scripts' contents.
"""

import logging
import os
import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from scriptsort.core.buffer import INITIAL_CAPACITY, OutputBuffer
from scriptsort.core.errors import FileReadError
from scriptsort.core.template import (
    DEFAULT_ELAPSED_VARIABLE,
    DEFAULT_TIMER_COMMAND,
    render_bundle_epilogue,
    render_bundle_prologue,
    render_init_script,
)
from scriptsort.models.entry import ClassifiedEntries

logger = logging.getLogger(__name__)

SEPARATOR = b"\n"


class OutputMode(str, Enum):
    """Output mode of a run.

    Attributes:
        NAMES: Print script names (optionally wrapped in the init template).
        BUNDLE: Print the concatenated script contents.
    """

    NAMES = "names"
    BUNDLE = "bundle"


@dataclass(frozen=True, slots=True)
class AssemblyOptions:
    """Rendering options shared by both output modes.

    Attributes:
        mode: Selected output mode.
        init: Wrap the name list in the sourceable shell template.
            Ignored in bundle mode.
        debug: Add timing instrumentation to the output.
        timer_command: Millisecond timer helper referenced by the shell text.
        elapsed_variable: Variable exported with the bundle's elapsed time.
        initial_capacity: Starting capacity of the bundle buffer.
    """

    mode: OutputMode = OutputMode.NAMES
    init: bool = False
    debug: bool = False
    timer_command: str = DEFAULT_TIMER_COMMAND
    elapsed_variable: str = DEFAULT_ELAPSED_VARIABLE
    initial_capacity: int = INITIAL_CAPACITY


@dataclass(frozen=True, slots=True)
class AssemblyResult:
    """Rendered output of a run.

    Attributes:
        output: Bytes to write to stdout.
        failures: Files skipped because they could not be read.
    """

    output: bytes
    failures: tuple[FileReadError, ...] = ()

    @property
    def has_failures(self) -> bool:
        """Check if any file was skipped."""
        return bool(self.failures)


def assemble_names(
    entries: ClassifiedEntries,
    directory: Path,
    *,
    init: bool = False,
    debug: bool = False,
    timer_command: str = DEFAULT_TIMER_COMMAND,
) -> bytes:
    """Render the ordered script names.

    Names are newline-terminated. With ``init`` they are shell-quoted,
    space-joined and embedded in the ``includeScripts`` template.

    Args:
        entries: Sorted entries.
        directory: Scanned directory, referenced by the init template.
        init: Render the sourceable shell template.
        debug: Emit progress lines from the template (init only).
        timer_command: Millisecond timer helper name.

    Returns:
        Encoded output.
    """
    joiner = b" " if init else b"\n"

    # Name lengths are known up front, so the buffer never needs to grow
    # unless quoting lengthens a name.
    capacity = max(entries.total_name_bytes + len(entries), 1)
    buffer = OutputBuffer(capacity)

    for entry in entries.ordered():
        name = entry.raw_name
        if init:
            name = os.fsencode(shlex.quote(entry.name))
        buffer.append(name)
        buffer.append(joiner)

    if not init:
        return buffer.getvalue()

    script = render_init_script(
        os.fsdecode(buffer.getvalue()),
        directory,
        debug=debug,
        timer_command=timer_command,
    )
    return os.fsencode(script)


def read_script(path: Path) -> bytes:
    """Read the full contents of a script.

    Args:
        path: Script to read.

    Returns:
        The file's bytes.

    Raises:
        FileReadError: If the file cannot be opened, stat'd or fully read.
    """
    try:
        with path.open("rb") as f:
            size = os.fstat(f.fileno()).st_size
            data = f.read(size)
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e

    if len(data) != size:
        raise FileReadError(path, f"short read ({len(data)} of {size} bytes)")
    return data


def assemble_bundle(
    entries: ClassifiedEntries,
    directory: Path,
    *,
    debug: bool = False,
    timer_command: str = DEFAULT_TIMER_COMMAND,
    elapsed_variable: str = DEFAULT_ELAPSED_VARIABLE,
    initial_capacity: int = INITIAL_CAPACITY,
) -> AssemblyResult:
    """Concatenate the contents of every script in execution order.

    Each script is followed by a single newline. Unreadable scripts are
    skipped and reported in the result; they never abort the bundle.

    Args:
        entries: Sorted entries.
        directory: Directory containing the scripts.
        debug: Bracket the bundle with timer capture lines.
        timer_command: Millisecond timer helper name.
        elapsed_variable: Variable exported with the elapsed time.
        initial_capacity: Starting capacity of the output buffer.

    Returns:
        AssemblyResult with the bundle and any skipped files.

    Raises:
        AllocationError: If the output buffer cannot grow.
    """
    buffer = OutputBuffer(initial_capacity)
    failures: list[FileReadError] = []

    for entry in entries.ordered():
        try:
            contents = read_script(directory / entry.name)
        except FileReadError as e:
            logger.debug("Skipping %s: %s", e.path, e.reason)
            failures.append(e)
            continue

        buffer.append(contents)
        buffer.append(SEPARATOR)

    body = buffer.getvalue()
    buffer.release()

    parts: list[bytes] = []
    if debug:
        parts.append(render_bundle_prologue(timer_command).encode())
    if body:
        parts.append(body + SEPARATOR)
    if debug:
        parts.append(render_bundle_epilogue(timer_command, elapsed_variable).encode())

    return AssemblyResult(output=b"".join(parts), failures=tuple(failures))


def assemble(
    entries: ClassifiedEntries,
    directory: Path,
    options: AssemblyOptions | None = None,
) -> AssemblyResult:
    """Render the output for the selected mode.

    Bundle mode takes precedence over init; the template wrapping only
    applies to the name list.

    Args:
        entries: Sorted entries.
        directory: Scanned directory.
        options: Rendering options. Defaults to a plain name list.

    Returns:
        AssemblyResult for the run.
    """
    options = options or AssemblyOptions()

    if options.mode == OutputMode.BUNDLE:
        return assemble_bundle(
            entries,
            directory,
            debug=options.debug,
            timer_command=options.timer_command,
            elapsed_variable=options.elapsed_variable,
            initial_capacity=options.initial_capacity,
        )

    output = assemble_names(
        entries,
        directory,
        init=options.init,
        debug=options.debug,
        timer_command=options.timer_command,
    )
    return AssemblyResult(output=output)
