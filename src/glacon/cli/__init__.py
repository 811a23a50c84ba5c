"""Command-line interface for glacon.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bar while icons are converted
- Verbose/quiet output modes
- Icon map inspection of compiled fonts, as a table or JSON
"""

from glacon.cli.app import cli, main

__all__ = ["cli", "main"]
