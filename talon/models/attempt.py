# Attempt data model.
#
# An Attempt is the (target, credential, service) triple handed to an
# authenticator. It is not retained once its AttemptResult is produced.

from dataclasses import dataclass
from typing import Optional

from ..auth import Credential
from .outcome import Outcome, ServiceKind


@dataclass(frozen=True)
class Attempt:
    """A single authentication attempt against one host."""

    target: str
    credential: Credential
    service: ServiceKind
    enumerate: bool = False


@dataclass
class AttemptResult:
    """
    Result of one attempt as produced by an authenticator.

    Attributes:
        attempt: The attempt this result belongs to
        outcome: Semantic classification of the protocol response
        display: Rich-markup rendering for the terminal
        plain: Undecorated rendering for the result file
        raw_error: Protocol error text as returned by the client (None on success)
    """

    attempt: Attempt
    outcome: Outcome
    display: str
    plain: str
    raw_error: Optional[str] = None

    @property
    def username(self) -> str:
        return self.attempt.credential.username
