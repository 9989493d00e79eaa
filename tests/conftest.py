"""
Pytest configuration and shared fixtures for Talon tests.
"""

import os
from typing import Dict, List, Optional

import pytest

from talon.classification import ClassificationResult
from talon.config_model import RunConfig
from talon.engine.decisions import Decision
from talon.models.attempt import Attempt, AttemptResult
from talon.models.outcome import Outcome, ServiceKind
from talon.output.formatter import render


@pytest.fixture(autouse=True)
def reset_verbosity(monkeypatch):
    """Keep verbosity flags from leaking between tests."""
    from talon.utils import logging as talon_logging
    from talon.utils.console import console

    monkeypatch.delenv("TALON_DEBUG", raising=False)
    # Wide enough that captured lines are never wrapped
    monkeypatch.setattr(console, "width", 200)
    yield
    talon_logging.set_verbosity(False, False)
    os.environ.pop("TALON_DEBUG", None)


@pytest.fixture
def write_list(tmp_path):
    """Write a list file and return its path."""

    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content)
        return str(path)

    return _write


@pytest.fixture
def make_config():
    """Build a RunConfig with test-friendly defaults (no sleep, one host)."""

    def _make(**overrides) -> RunConfig:
        values = {
            "hosts": ("10.0.0.1",),
            "usernames": ("alice", "bob"),
            "password": "Winter2024!",
            "domain": "corp.local",
            "sleep": 0,
        }
        values.update(overrides)
        return RunConfig(**values)

    return _make


class FakeAuthenticator:
    """
    Authenticator double returning scripted outcomes per username.

    Usernames without a scripted outcome get FAILED. Every attempt is kept in
    `calls` (shared between all fakes built by one factory).
    """

    def __init__(self, service: ServiceKind, outcomes: Dict[str, Outcome], calls: List[Attempt]):
        self.service = service
        self.outcomes = outcomes
        self.calls = calls

    def login(self, attempt: Attempt) -> AttemptResult:
        self.calls.append(attempt)
        outcome = self.outcomes.get(attempt.credential.username, Outcome.FAILED)
        raw_error: Optional[str] = None if outcome is Outcome.SUCCESS else f"scripted {outcome.value}"
        classification = ClassificationResult(outcome, None, raw_error)
        display, plain = render(attempt, classification.outcome)
        return AttemptResult(attempt, outcome, display, plain, raw_error)


@pytest.fixture
def fake_factory():
    """Return (factory, calls); factory(service) builds a FakeAuthenticator."""

    def _build(outcomes: Optional[Dict[str, Outcome]] = None):
        calls: List[Attempt] = []

        def factory(service: ServiceKind) -> FakeAuthenticator:
            return FakeAuthenticator(service, outcomes or {}, calls)

        return factory, calls

    return _build


class ScriptedDecisions:
    """Decision point that answers from a list and counts how often it was asked."""

    def __init__(self, *answers: Decision):
        self.answers = list(answers)
        self.asked: List[AttemptResult] = []

    def __call__(self, result: AttemptResult) -> Decision:
        self.asked.append(result)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt for {result.username}")
        return self.answers.pop(0)


@pytest.fixture
def scripted():
    """Build a scripted decision point: scripted(Decision.CONTINUE, ...)."""
    return ScriptedDecisions
