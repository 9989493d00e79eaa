# Engine package for running attempts.
#
# This package provides the attempt scheduler and the operator decision
# points it consults on lockouts and network errors.

from .decisions import Decision, prompt_lockout, prompt_network_error
from .scheduler import AttemptScheduler

__all__ = [
    "AttemptScheduler",
    "Decision",
    "prompt_lockout",
    "prompt_network_error",
]
