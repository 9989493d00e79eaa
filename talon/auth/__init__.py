# Credential handling.
#
# This module provides the Credential dataclass shared by every
# authenticator, so a run's identity is passed around as one value.

from .context import Credential

__all__ = ["Credential"]
