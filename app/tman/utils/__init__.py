"""Utility modules for tman.

This module exports commonly used utility functions.
"""

from tman.utils.formatting import (
    apply_settings,
    console,
    err_console,
    glyph,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "apply_settings",
    "console",
    "err_console",
    "glyph",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
