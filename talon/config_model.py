"""Run configuration and run state for Talon."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .exceptions import ConfigurationError
from .models.attempt import AttemptResult
from .models.outcome import Outcome, ServiceKind
from .utils.helpers import read_host_list, read_user_list

# Placeholder password sent in enumeration mode
ENUMERATION_PASSWORD = " "


@dataclass(frozen=True)
class RunConfig:
    """
    Validated, immutable settings for one run.

    Built from CLI args merged with talon.toml defaults (see config.py).
    """

    hosts: Tuple[str, ...]
    usernames: Tuple[str, ...]
    password: str
    domain: str
    services: Tuple[ServiceKind, ...] = (ServiceKind.KERBEROS, ServiceKind.LDAP)
    randomize_hosts: bool = False
    enumerate: bool = False
    sleep: float = 0.5
    output_file: Optional[str] = None
    show_summary: bool = True

    def __post_init__(self):
        object.__setattr__(self, "domain", self.domain.upper())
        if not self.services:
            raise ConfigurationError("At least one service is required")
        if self.sleep < 0:
            raise ConfigurationError(f"Sleep must not be negative (got {self.sleep})")

    @classmethod
    def from_args(cls, args):
        """
        Create RunConfig from validated argparse args, loading list files.

        Hosts: the single -H host first, then the host file. Usernames: the
        user file first, then the single -U user.

        Args:
            args: argparse.Namespace that passed validate_args()

        Returns:
            RunConfig instance

        Raises:
            SourceError: If a list file cannot be read
        """
        hosts: List[str] = []
        if args.host:
            hosts.append(args.host)
        if args.hostfile:
            hosts.extend(read_host_list(args.hostfile))

        usernames: List[str] = []
        if args.userfile:
            usernames.extend(read_user_list(args.userfile))
        if args.user:
            usernames.append(args.user)

        if args.enum:
            services = (ServiceKind.KERBEROS,)
            password = ENUMERATION_PASSWORD
        elif args.kerberos:
            services = (ServiceKind.KERBEROS,)
            password = args.password
        elif args.ldap:
            services = (ServiceKind.LDAP,)
            password = args.password
        else:
            services = (ServiceKind.KERBEROS, ServiceKind.LDAP)
            password = args.password

        return cls(
            hosts=tuple(hosts),
            usernames=tuple(usernames),
            password=password,
            domain=args.domain,
            services=services,
            randomize_hosts=bool(args.hostfile),
            enumerate=bool(args.enum),
            sleep=float(args.sleep),
            output_file=args.output or None,
            show_summary=not getattr(args, "no_summary", False),
        )


@dataclass
class RunState:
    """Mutable state of a run. Only the scheduler changes it."""

    rotation: int = 0
    counts: Counter = field(default_factory=Counter)
    hits: List[str] = field(default_factory=list)
    recorded: int = 0

    def advance(self, service_count: int) -> None:
        """Move to the next service, wrapping around the service list."""
        self.rotation = (self.rotation + 1) % service_count

    def record(self, result: AttemptResult) -> None:
        self.recorded += 1
        self.counts[result.outcome] += 1
        if result.outcome.positive:
            self.hits.append(result.plain)

    def summary_counts(self) -> Dict[str, int]:
        """Attempt counts keyed by display label."""
        return {
            ("Unclassified" if outcome is Outcome.UNCLASSIFIED else outcome.label): count
            for outcome, count in self.counts.items()
        }
