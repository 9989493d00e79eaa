# Operator decision points.
#
# The scheduler never reads the terminal itself: it is handed callables that
# turn an AttemptResult into a Decision. The CLI wires the interactive
# prompts below; tests pass their own.

from enum import Enum
from typing import Callable

from rich.markup import escape

from ..models.attempt import AttemptResult
from ..utils.console import ask
from ..utils.logging import warn


class Decision(str, Enum):
    CONTINUE = "continue"
    ABORT = "abort"


DecisionPoint = Callable[[AttemptResult], Decision]


def parse_answer(answer: str) -> Decision:
    """Any answer starting with 'y' continues; everything else aborts."""
    return Decision.CONTINUE if answer.strip().lower().startswith("y") else Decision.ABORT


def prompt_lockout(result: AttemptResult) -> Decision:
    """Ask whether to keep going after a locked-out account was observed."""
    return parse_answer(ask("[*] Account lock out detected - Do you want to continue.[y/n]: "))


def prompt_network_error(result: AttemptResult) -> Decision:
    """Ask whether to keep going after a host could not be reached."""
    target = result.attempt.target
    warn(f"[Root cause: Networking_Error] {result.attempt.service.value} on {target}: {escape(result.raw_error or '')}")
    return parse_answer(ask("[*] Do you want to continue.[y/n]: "))
