# Output entry points for the rest of the package.
#
# Modules outside utils/console.py print through these names so verbosity
# is decided in one place. Debug output can also be enabled with
# TALON_DEBUG=1, which --debug exports for the rest of the process.

import os

from . import console as _console
from .console import debug, error, info, status, warn

__all__ = ["debug", "error", "info", "set_verbosity", "status", "warn"]


def set_verbosity(verbose: bool, debug_flag: bool):
    """Apply --verbose/--debug to the console."""
    _console.set_verbosity(verbose, debug_flag)
    if debug_flag:
        os.environ["TALON_DEBUG"] = "1"
