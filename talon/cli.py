import sys

from rich.markup import escape

from .config import build_parser, validate_args
from .config_model import RunConfig
from .engine import AttemptScheduler, prompt_lockout, prompt_network_error
from .exceptions import ClockSkewError, OutputError, RunAborted, SourceError
from .utils.console import print_banner, print_run_summary
from .utils.logging import debug, error, info, set_verbosity, status, warn


def _describe_run(config: RunConfig):
    services = ", ".join(s.value for s in config.services)
    info(f"Domain: {config.domain}")
    info(f"Services: {services}{' (enumeration)' if config.enumerate else ''}")
    info(f"{len(config.usernames)} username(s) against {len(config.hosts)} host(s), {config.sleep}s between attempts")
    debug(f"Hosts: {list(config.hosts)}")
    debug(f"Usernames: {list(config.usernames)}")
    if config.output_file:
        debug(f"Appending results to {config.output_file}")


def run(args) -> int:
    """Run the attempts described by validated args. Returns the exit code."""
    try:
        config = RunConfig.from_args(args)
    except SourceError as e:
        error(str(e))
        return 1

    if not config.hosts:
        warn("No hosts to attempt against")
        return 1

    if not config.usernames:
        warn("No usernames to attempt")
        return 1

    _describe_run(config)

    scheduler = AttemptScheduler(
        config,
        on_lockout=prompt_lockout,
        on_network_error=prompt_network_error,
    )

    exit_code = 0
    try:
        scheduler.run()
    except ClockSkewError as e:
        status(f"[bold red][!] {escape(str(e))}[/]")
        status("[*] Shutting down")
        exit_code = 1
    except RunAborted as e:
        debug(str(e))
        status("[*] Shutting down")
        exit_code = 1
    except OutputError as e:
        error(str(e))
        exit_code = 1
    except KeyboardInterrupt:
        warn("Interrupted by user")
        exit_code = 130

    if config.show_summary:
        print_run_summary(scheduler.state.summary_counts(), scheduler.state.hits, enumeration=config.enumerate)

    return exit_code


def main():
    print_banner()
    ap = build_parser()
    args = ap.parse_args()

    set_verbosity(args.verbose, args.debug)

    validate_args(args)

    sys.exit(run(args))
