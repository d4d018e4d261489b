"""Main CLI application entry point.

Defines the Typer application that scans a scripts directory and prints
the execution order, the sourceable init script or the script bundle.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Annotated

import click
import typer

from scriptsort import __version__
from scriptsort.core.assembler import AssemblyOptions, OutputMode, assemble
from scriptsort.core.classifier import DEFAULT_CUTOFF, classify, validate_cutoff
from scriptsort.core.errors import ArgumentError, ScriptSortError
from scriptsort.core.scanner import scan_directory
from scriptsort.core.settings import load_settings
from scriptsort.core.sorter import sort_entries
from scriptsort.utils.formatting import configure_logging, print_error, print_warning

logger = logging.getLogger(__name__)

# Long flags matched case-insensitively (whole-flag equality).
KNOWN_FLAGS: tuple[str, ...] = (
    "--init",
    "--bundle",
    "--debug",
    "--cutoff",
    "--config",
    "--verbose",
    "--version",
    "--help",
)

_DECIMAL = re.compile(r"[0-9]+")

app = typer.Typer(
    name="scriptsort",
    help="Order shell startup scripts for sourcing.",
    add_completion=False,
    rich_markup_mode="rich",
)


def normalize_flags(args: list[str]) -> list[str]:
    """Lowercase every argument that case-insensitively equals a known flag.

    ``--cutoff=N`` style arguments are normalized on the flag part only.

    Args:
        args: Raw command line arguments (without the program name).

    Returns:
        Arguments with known flags in canonical lowercase form.
    """
    normalized: list[str] = []
    for arg in args:
        flag, sep, value = arg.partition("=")
        if flag.lower() in KNOWN_FLAGS:
            normalized.append(f"{flag.lower()}{sep}{value}")
        else:
            normalized.append(arg)
    return normalized


def parse_cutoff(value: str | None, default: int) -> int:
    """Parse the ``--cutoff`` value.

    Args:
        value: Raw option value, or None when the flag was not given.
        default: Cutoff to use when the flag was not given.

    Returns:
        Positive cutoff.

    Raises:
        ArgumentError: If the value is not a positive integer.
    """
    if value is None:
        return default

    if _DECIMAL.fullmatch(value) is None:
        msg = (
            f"Invalid cutoff {value!r}: the cutoff defaults to {DEFAULT_CUTOFF}, "
            "but must be a number greater than 0."
        )
        raise ArgumentError(msg)
    return validate_cutoff(int(value))


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"scriptsort version {__version__}")
        raise typer.Exit()


@app.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "ignore_unknown_options": True,
        "allow_extra_args": True,
    },
)
def main(
    ctx: typer.Context,
    directory: Annotated[
        Path | None,
        typer.Argument(
            help="Directory containing the scripts to order.",
            show_default=False,
        ),
    ] = None,
    init: Annotated[
        bool,
        typer.Option("--init", help="Print a script that can be sourced."),
    ] = False,
    bundle: Annotated[
        bool,
        typer.Option("--bundle", help="Concatenate all scripts into a single output."),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Add timing instrumentation to the output."),
    ] = False,
    cutoff: Annotated[
        str | None,
        typer.Option(
            "--cutoff",
            metavar="N",
            help="First order number that runs after unordered scripts (default: 50).",
            show_default=False,
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Settings file (default: ~/.config/scriptsort/config.toml).",
            show_default=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log diagnostics to stderr."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Print the scripts of a directory in execution order.

    The order is:

      1. ordered.(0-49).(anything)
      2. files not prefixed with ordered.
      3. ordered.(50+).(anything)

    Files prefixed with skip. are never listed.

    Examples:
        scriptsort ~/.zsh.scripts                   # One name per line
        scriptsort ~/.zsh.scripts --cutoff 60       # Move the upper bucket boundary
        source <(scriptsort ~/.zsh.scripts --init)  # Source all scripts in order
        eval "$(scriptsort ~/.zsh.scripts --bundle)"
    """
    configure_logging(verbose)

    if ctx.args:
        logger.warning("Ignoring unrecognized argument(s): %s", " ".join(ctx.args))

    try:
        if directory is None:
            msg = "Missing directory argument. Run 'scriptsort --help' for usage."
            raise ArgumentError(msg)

        settings = load_settings(config)
        cutoff_value = parse_cutoff(cutoff, settings.cutoff)

        names = scan_directory(directory)
        entries = sort_entries(classify(names, cutoff_value))

        options = AssemblyOptions(
            mode=OutputMode.BUNDLE if bundle else OutputMode.NAMES,
            init=init,
            debug=debug,
            timer_command=settings.timer_command,
            elapsed_variable=settings.elapsed_variable,
            initial_capacity=settings.initial_buffer_capacity,
        )
        result = assemble(entries, directory, options)
    except ScriptSortError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    for failure in result.failures:
        print_warning(str(failure))

    typer.echo(result.output, nl=False)


def run() -> None:
    """Console script entry point with case-insensitive flag matching.

    Command line usage errors, such as ``--cutoff`` without a value, exit
    with 1 like every other argument error.
    """
    try:
        code = app(
            args=normalize_flags(sys.argv[1:]),
            prog_name="scriptsort",
            standalone_mode=False,
        )
    except click.ClickException as e:
        print_error(f"{e.format_message()} Run 'scriptsort --help' for usage.")
        code = 1
    sys.exit(code or 0)


if __name__ == "__main__":
    run()
