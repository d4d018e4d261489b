"""Millisecond timer helper.

Prints the milliseconds since the Unix epoch. Scripts generated by
``scriptsort --init`` and ``--debug`` call it, when it is on PATH, to
time how long sourcing takes.
"""

import time

import typer

app = typer.Typer(
    name="ms",
    help="Print milliseconds since the Unix epoch.",
    add_completion=False,
)


def now_ms() -> int:
    """Get the current time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


@app.command()
def ms() -> None:
    """Print milliseconds since the Unix epoch."""
    typer.echo(now_ms())


def main() -> None:
    """Console script entry point."""
    app(prog_name="ms")


if __name__ == "__main__":
    main()
