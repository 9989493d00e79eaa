"""
Tests for the interactive operator prompts.
"""

import io
from unittest.mock import patch

import pytest

from talon.auth import Credential
from talon.engine.decisions import Decision, parse_answer, prompt_lockout, prompt_network_error
from talon.models.attempt import Attempt, AttemptResult
from talon.models.outcome import Outcome, ServiceKind


def _result(outcome):
    attempt = Attempt("10.0.0.1", Credential("jdoe", "pw", "corp.local"), ServiceKind.LDAP)
    return AttemptResult(attempt, outcome, "display", "plain", "connection refused")


@pytest.mark.parametrize(
    "answer,expected",
    [
        ("y", Decision.CONTINUE),
        ("Y", Decision.CONTINUE),
        ("  yes\n", Decision.CONTINUE),
        ("n", Decision.ABORT),
        ("", Decision.ABORT),
        ("maybe", Decision.ABORT),
    ],
)
def test_parse_answer(answer, expected):
    assert parse_answer(answer) is expected


@patch("talon.engine.decisions.ask", return_value="y")
def test_lockout_prompt(mock_ask):
    assert prompt_lockout(_result(Outcome.ACCOUNT_LOCKED)) is Decision.CONTINUE
    mock_ask.assert_called_once_with("[*] Account lock out detected - Do you want to continue.[y/n]: ")


@patch("talon.engine.decisions.ask", return_value="n")
def test_network_error_prompt(mock_ask, capsys):
    assert prompt_network_error(_result(Outcome.NETWORK_ERROR)) is Decision.ABORT
    mock_ask.assert_called_once_with("[*] Do you want to continue.[y/n]: ")
    assert "connection refused" in capsys.readouterr().out


@pytest.mark.parametrize("prompt", [prompt_lockout, prompt_network_error])
def test_closed_stdin_aborts(prompt, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    assert prompt(_result(Outcome.ACCOUNT_LOCKED)) is Decision.ABORT


def test_answer_read_from_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("yes\n"))

    assert prompt_lockout(_result(Outcome.ACCOUNT_LOCKED)) is Decision.CONTINUE
