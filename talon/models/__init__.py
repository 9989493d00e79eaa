# Data models for Talon.
#
# This package contains the enums and dataclasses passed between the
# scheduler, the authenticators and the output layer.

from .attempt import Attempt, AttemptResult
from .outcome import Outcome, ServiceKind

__all__ = ["Attempt", "AttemptResult", "Outcome", "ServiceKind"]
