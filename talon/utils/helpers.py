# Small helpers used across the codebase.
#
# This module loads the host and username lists and picks the target host
# for each attempt.

import random
from typing import List, Optional

from ..exceptions import SourceError
from .logging import debug


def read_lines(path: str) -> List[str]:
    """
    Read a list file, one entry per line.

    Line endings and surrounding whitespace are stripped and blank lines are
    dropped here, so a trailing newline never yields an empty entry.

    Args:
        path: Path to the list file

    Returns:
        Non-empty lines in file order

    Raises:
        SourceError: If the file cannot be read
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            lines = [line.strip() for line in f]
    except OSError as e:
        raise SourceError(f"Could not read {path}: {e}") from e
    return [line for line in lines if line]


def read_host_list(path: str) -> List[str]:
    """Read domain controller addresses from a file."""
    hosts = read_lines(path)
    debug(f"Read {len(hosts)} hosts from {path}")
    return hosts


def read_user_list(path: str) -> List[str]:
    """Read usernames from a file."""
    users = read_lines(path)
    debug(f"Read {len(users)} usernames from {path}")
    return users


def pick_target(hosts: List[str], randomize: bool, rng: Optional[random.Random] = None) -> str:
    """
    Select the host for the next attempt.

    Args:
        hosts: Non-empty list of hosts
        randomize: Pick uniformly over the whole list (host file given);
            otherwise the first host is used for every attempt
        rng: Random source (defaults to the module-level generator)

    Returns:
        Host address
    """
    if not hosts:
        raise SourceError("No hosts to attempt against")
    if not randomize:
        return hosts[0]
    return (rng or random).choice(hosts)
