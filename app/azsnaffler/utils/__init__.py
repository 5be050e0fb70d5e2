"""Utility modules for azsnaffler.

This module exports commonly used utility functions.
"""

from azsnaffler.utils.formatting import (
    console,
    create_findings_table,
    err_console,
    format_finding,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_findings_table",
    "err_console",
    "format_finding",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
