# Attempt scheduler.
#
# Walks the username list in order, one attempt per username. Each attempt
# picks a target host, waits the configured delay, runs the authenticator for
# the current service, prints and records the result, then moves the service
# rotation forward. The rotation and the result file are only touched here.

import random
import time
from typing import Callable, Dict, Iterable, Optional

from rich.markup import escape

from ..auth import Credential
from ..authenticators import Authenticator, build_authenticator
from ..config_model import RunConfig, RunState
from ..exceptions import RunAborted
from ..models.attempt import Attempt, AttemptResult
from ..models.outcome import Outcome, ServiceKind
from ..output.writer import append_result
from ..utils.helpers import pick_target
from ..utils.logging import debug, status, warn
from .decisions import Decision, DecisionPoint, prompt_lockout, prompt_network_error


class AttemptScheduler:
    """
    Drives a run: sequential attempts over the username list.

    Args:
        config: Validated run configuration
        on_lockout: Called once per ACCOUNT_LOCKED result outside enumeration
        on_network_error: Called once per NETWORK_ERROR result
        authenticator_factory: ServiceKind -> Authenticator
        sleep: Delay function, seconds as float
        rng: Random source for host selection
    """

    def __init__(
        self,
        config: RunConfig,
        on_lockout: DecisionPoint = prompt_lockout,
        on_network_error: DecisionPoint = prompt_network_error,
        authenticator_factory: Callable[[ServiceKind], Authenticator] = build_authenticator,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.on_lockout = on_lockout
        self.on_network_error = on_network_error
        self._factory = authenticator_factory
        self._sleep = sleep
        self._rng = rng
        self._authenticators: Dict[ServiceKind, Authenticator] = {}
        self.state = RunState()

    def run(self, usernames: Optional[Iterable[str]] = None) -> RunState:
        """
        Run one attempt per username.

        Raises:
            RunAborted: The operator declined to continue
            ClockSkewError: The KDC reported clock skew
            OutputError: The result file could not be written
        """
        for username in usernames if usernames is not None else self.config.usernames:
            self.step(username)
        return self.state

    def step(self, username: str) -> AttemptResult:
        """Run, display and record the attempt for one username."""
        config = self.config
        target = pick_target(list(config.hosts), config.randomize_hosts, self._rng)
        self._sleep(config.sleep)

        service = config.services[self.state.rotation]
        attempt = Attempt(
            target=target,
            credential=Credential(username, config.password, config.domain),
            service=service,
            enumerate=config.enumerate,
        )
        debug(f"Attempt {self.state.recorded + 1}: {service.value} {username} -> {target}")

        result = self._authenticator(service).login(attempt)
        status(result.display)

        if result.outcome is Outcome.NETWORK_ERROR:
            self._decide(self.on_network_error, result)
        elif result.outcome is Outcome.ACCOUNT_LOCKED and not config.enumerate:
            self._decide(self.on_lockout, result)
        elif result.outcome is Outcome.UNCLASSIFIED:
            warn(f"Unrecognised response for {username}: {escape(result.raw_error or '')}")

        self._record(result)
        self.state.advance(len(config.services))
        return result

    def _authenticator(self, service: ServiceKind) -> Authenticator:
        if service not in self._authenticators:
            self._authenticators[service] = self._factory(service)
        return self._authenticators[service]

    def _decide(self, decision_point: DecisionPoint, result: AttemptResult) -> None:
        if decision_point(result) is Decision.ABORT:
            raise RunAborted(f"Stopped by operator after {result.outcome.label} for {result.username}")

    def _record(self, result: AttemptResult) -> None:
        self.state.record(result)
        if self.config.output_file:
            append_result(self.config.output_file, result.plain)
