# Rich-based console for colored terminal output.
#
# This module provides the single console used for all Talon output:
# status lines, attempt results, operator prompts and the run summary.

import os
from typing import Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Global console instance
console = Console(highlight=False)


# =============================================================================
# Banner
# =============================================================================

TALON_RED = "#D7263D"

BANNER_ART = r"""
  __________  ________  ___       ________  ________
  |\___    _\\\   __  \|\  \     |\   __  \|\   ___  \
  \|___ \  \_\ \  \|\  \ \  \    \ \  \|\  \ \  \\ \  \
       \ \  \ \ \   __  \ \  \    \ \  \\\  \ \  \\ \  \
        \ \  \ \ \  \ \  \ \  \____\ \  \\\  \ \  \\ \  \
         \ \__\ \ \__\ \__\ \_______\ \_______\ \__\\ \__\
          \|__|  \|__|\|__|\|_______|\|_______|\|__| \|__|
"""


def print_banner():
    """Print the colored Talon banner."""
    # Backslashes in the art must not be parsed as markup escapes
    console.print(BANNER_ART, style=f"bold {TALON_RED}", markup=False)


# =============================================================================
# Status Messages
# =============================================================================

def status(msg: str):
    """Print a status message (always visible)."""
    console.print(msg)


def warn(msg: str):
    """Print a warning message in yellow."""
    console.print(f"[yellow][!][/] {msg}")


def error(msg: str):
    """Print an error message in red."""
    console.print(f"[red][-][/] {msg}")


def info(msg: str):
    """Print an info message in blue (verbose or debug only)."""
    if not _is_verbose():
        return
    console.print(f"[blue][*][/] {msg}")


def debug(msg: str, exc_info: bool = False):
    """Print a debug message in dim text."""
    if not _is_debug():
        return
    console.print(f"[dim][DEBUG][/] {escape(msg)}")
    if exc_info:
        console.print_exception()


def ask(prompt: str) -> str:
    """Read one line of operator input. A closed stdin reads as an empty answer."""
    try:
        return console.input(escape(prompt))
    except EOFError:
        console.print()
        return ""


# =============================================================================
# Verbosity Control
# =============================================================================

_VERBOSE = False
_DEBUG = False


def set_verbosity(verbose: bool, debug: bool):
    """Set verbosity levels."""
    global _VERBOSE, _DEBUG
    _VERBOSE = verbose
    _DEBUG = debug


def _is_verbose() -> bool:
    return _VERBOSE or _DEBUG


def _is_debug() -> bool:
    return _DEBUG or bool(os.getenv("TALON_DEBUG"))


# =============================================================================
# Run Summary
# =============================================================================

def print_run_summary(counts: Dict[str, int], hits: List[str], enumeration: bool = False):
    """
    Print a rich summary panel after the run.

    Args:
        counts: Dict of {outcome label: number of attempts}
        hits: Plain result lines worth keeping (valid logins or existing users)
        enumeration: Whether the run was in enumeration mode (changes the hits title)
    """
    if not counts:
        return

    table = Table(
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
        box=None,
    )
    table.add_column("Outcome", style="white", no_wrap=True)
    table.add_column("Attempts", justify="right")

    for label in sorted(counts):
        table.add_row(escape(label), str(counts[label]))

    if len(counts) > 1:
        table.add_section()
        table.add_row("[bold]TOTAL[/]", f"[bold]{sum(counts.values())}[/]")

    console.print()
    console.print(Panel(table, title="[bold]RUN SUMMARY[/]", border_style="cyan"))

    if hits:
        title = "EXISTING USERS" if enumeration else "VALID CREDENTIALS"
        hit_table = Table(show_header=False, box=None, border_style="dim green")
        hit_table.add_column("Result", style="green")
        for line in hits:
            hit_table.add_row(escape(line))
        console.print(Panel(hit_table, title=f"[bold]{title}[/]", border_style="green"))
