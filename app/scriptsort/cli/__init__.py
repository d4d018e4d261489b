"""CLI package for scriptsort.

This package contains the Typer applications for scriptsort and the
``ms`` timer helper.
"""

from scriptsort.cli.main import app, run

__all__ = ["app", "run"]
