from abc import ABC, abstractmethod

from ..classification import ClassificationResult
from ..models.attempt import Attempt, AttemptResult
from ..output.formatter import render


class Authenticator(ABC):
    """Submits one attempt to a protocol client and classifies the response."""

    service = None

    @abstractmethod
    def login(self, attempt: Attempt) -> AttemptResult:
        """Run the attempt; never raises for protocol-level failures."""

    def _result(self, attempt: Attempt, classification: ClassificationResult) -> AttemptResult:
        display, plain = render(attempt, classification.outcome)
        return AttemptResult(
            attempt=attempt,
            outcome=classification.outcome,
            display=display,
            plain=plain,
            raw_error=classification.raw_error,
        )
