"""CLI commands for azsnaffler.

This package contains all subcommand implementations.
"""

from azsnaffler.cli.commands import config, local, rules, scan

__all__ = ["config", "local", "rules", "scan"]
