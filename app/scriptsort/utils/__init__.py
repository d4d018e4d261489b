"""Utility modules for scriptsort.

This module exports commonly used utility functions.
"""

from scriptsort.utils.formatting import (
    configure_logging,
    err_console,
    print_error,
    print_warning,
)

__all__ = [
    "configure_logging",
    "err_console",
    "print_error",
    "print_warning",
]
