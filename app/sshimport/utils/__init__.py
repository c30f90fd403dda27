"""Utility modules for sshimport.

This module exports commonly used utility functions.
"""

from sshimport.utils.formatting import (
    console,
    err_console,
    format_atime,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "format_atime",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
