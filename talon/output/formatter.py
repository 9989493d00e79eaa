# Result line rendering.
#
# Every attempt is rendered twice with the same field order:
#     marker host DOMAIN\username:password = label
# once with rich markup for the terminal and once plain for the result file.

from typing import Tuple

from rich.markup import escape

from ..models.attempt import Attempt
from ..models.outcome import Outcome
from . import COLORS

POSITIVE_MARKER = "[+]"
NEGATIVE_MARKER = "[-]"


def format_plain(attempt: Attempt, outcome: Outcome) -> str:
    """Undecorated result line, as appended to the result file."""
    marker = POSITIVE_MARKER if outcome.positive else NEGATIVE_MARKER
    cred = attempt.credential
    return f"{marker} {attempt.target} {cred.down_level}:{cred.password} = {outcome.label}"


def format_display(attempt: Attempt, outcome: Outcome) -> str:
    """Result line with the marker and label colored for the terminal."""
    color = COLORS["success"] if outcome.positive else COLORS["failure"]
    marker = POSITIVE_MARKER if outcome.positive else NEGATIVE_MARKER
    cred = attempt.credential
    # Host and credential fields are operator input and may contain markup
    fields = escape(f"{attempt.target} {cred.down_level}:{cred.password}")
    return f"[{color}]{escape(marker)}[/] {fields} = [{color}]{escape(outcome.label)}[/]"


def render(attempt: Attempt, outcome: Outcome) -> Tuple[str, str]:
    """Return (display, plain) renderings of one outcome."""
    return format_display(attempt, outcome), format_plain(attempt, outcome)
