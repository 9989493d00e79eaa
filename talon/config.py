import argparse
import os
import sys
from typing import Any, Dict

from rich.table import Table
from rich_argparse import RichHelpFormatter

try:
    import tomllib
except ImportError:
    # Fallback for older Python versions
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None

from .utils.console import console

CONFIG_PATHS = ["talon.toml", "config/talon.toml", os.path.expanduser("~/.config/talon/talon.toml")]

# TOML section -> {key: argparse dest}
CONFIG_SECTIONS = {
    "target": {"host": "host", "hostfile": "hostfile", "domain": "domain"},
    "credentials": {"user": "user", "userfile": "userfile", "password": "password"},
    "run": {"sleep": "sleep", "enum": "enum", "kerberos": "kerberos", "ldap": "ldap"},
    "output": {"file": "output", "no_summary": "no_summary", "verbose": "verbose", "debug": "debug"},
}


class TableRichHelpFormatter(RichHelpFormatter):
    """
    Help formatter with Rich styling and uppercase group names.
    """

    styles = {
        **RichHelpFormatter.styles,
        "argparse.groups": "bold red",
        "argparse.args": "green",
        "argparse.metavar": "yellow",
        "argparse.help": "white",
    }

    group_name_formatter = str.upper


def _option_cell(action: argparse.Action) -> str:
    """Flags plus metavar, e.g. '-U, --user USER'."""
    cell = ", ".join(action.option_strings)
    if action.nargs == 0:
        return cell
    return f"{cell} [yellow]{action.metavar or action.dest.upper()}[/]"


def _help_cell(action: argparse.Action) -> str:
    """Help text with the default appended for valued options. Passwords are never shown."""
    text = action.help or ""
    if action.dest == "password" or action.nargs == 0:
        return text
    if action.default is not None and action.default is not argparse.SUPPRESS:
        text += f" [dim](default: {action.default})[/]"
    return text


class TableHelpAction(argparse.Action):
    """
    Help action printing one Rich table per argument group.
    """

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        console.print(f"\n[bold white]{parser.description}[/]\n")
        console.print(f"[dim]Usage:[/] [bold]{parser.prog}[/] [OPTIONS]\n")

        for group in parser._action_groups:
            actions = [a for a in group._group_actions if not isinstance(a, TableHelpAction)]
            if not actions:
                continue

            table = Table(
                title=f"[bold red]{group.title.upper()}[/]",
                title_justify="left",
                caption=group.description,
                caption_justify="left",
                border_style="dim",
                header_style="bold white",
                padding=(0, 1),
            )
            table.add_column("Option", style="green", no_wrap=True)
            table.add_column("Description", style="white")
            for action in actions:
                table.add_row(_option_cell(action), _help_cell(action))

            console.print(table)
            console.print()

        parser.exit()


class OnceOnly(argparse.Action):
    """
    Reject a flag given more than once.

    Single-dash long aliases (-Hostfile, -Userfile) sit next to single-letter
    flags, so a repeated flag almost always means a mistyped command line.
    """

    def __call__(self, parser, namespace, values, option_string=None):
        # Tracked separately so a talon.toml default can still be overridden
        seen = getattr(namespace, "_once_seen", set())
        if self.dest in seen:
            raise argparse.ArgumentError(self, f"Argument {option_string} can only be specified once.")
        seen.add(self.dest)
        setattr(namespace, "_once_seen", seen)
        setattr(namespace, self.dest, values)


def load_config() -> Dict[str, Any]:
    """
    Load parser defaults from the first TOML config file found.

    Priority:
    1. ./talon.toml
    2. ./config/talon.toml
    3. ~/.config/talon/talon.toml

    Returns:
        Flat dict of argparse dest -> default value
    """
    if not tomllib:
        return {}

    config_data = {}
    loaded_path = None

    for path in CONFIG_PATHS:
        if os.path.exists(path):
            try:
                with open(path, "rb") as f:
                    config_data = tomllib.load(f)
                loaded_path = path
                break
            except (OSError, tomllib.TOMLDecodeError) as e:
                print(f"[!] Error loading config file {path}: {e}")

    if not config_data:
        return {}

    if loaded_path == "talon.toml":
        print("[!] WARNING: Using talon.toml from current directory")
        print("[!] Credentials stored here are easy to leak - consider config/talon.toml")

    defaults = {}
    for section, keys in CONFIG_SECTIONS.items():
        values = config_data.get(section, {})
        for key, dest in keys.items():
            if key in values:
                defaults[dest] = values[key]

    return defaults


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="talon",
        description="Password spraying and user enumeration over Kerberos and LDAP.",
        formatter_class=TableRichHelpFormatter,
        add_help=False,
    )
    ap.add_argument("-h", "--help", action=TableHelpAction, help="Show this help message")

    target = ap.add_argument_group("Target options")
    target.add_argument("-H", "--host", action=OnceOnly, help="Domain controller to attempt against")
    target.add_argument(
        "--hostfile",
        "-Hostfile",
        dest="hostfile",
        action=OnceOnly,
        help="File with domain controllers, one per line. A random host is picked for each attempt.",
    )
    target.add_argument("-D", "--domain", action=OnceOnly, help="Fully qualified domain name (e.g. corp.local)")

    creds = ap.add_argument_group("Credential options")
    creds.add_argument("-U", "--user", action=OnceOnly, help="Username to attempt")
    creds.add_argument(
        "--userfile",
        "-Userfile",
        dest="userfile",
        action=OnceOnly,
        help="File with usernames, one per line (attempted before -U)",
    )
    creds.add_argument("-P", "--password", action=OnceOnly, help="Password to spray")

    proto = ap.add_argument_group(
        "Protocol options", "Without -K or -L attempts alternate between Kerberos and LDAP."
    )
    proto.add_argument("-E", "--enum", action="store_true", help="Enumerate users over Kerberos (no password needed)")
    proto.add_argument("-K", "--kerberos", action="store_true", help="Attempt over Kerberos only")
    proto.add_argument("-L", "--ldap", action="store_true", help="Attempt over LDAP only")
    proto.add_argument(
        "--sleep",
        "-sleep",
        dest="sleep",
        type=float,
        default=0.5,
        help="Seconds to wait before each attempt",
    )

    output = ap.add_argument_group("Output options")
    output.add_argument("-O", "--output", action=OnceOnly, help="Append results to this file")
    output.add_argument("--no-summary", action="store_true", help="Do not print the run summary")

    misc = ap.add_argument_group("Misc")
    misc.add_argument("--verbose", action="store_true", help="Enable verbose output")
    misc.add_argument("--debug", action="store_true", help="Enable debug output (includes realm configuration)")

    config_defaults = load_config()
    if config_defaults:
        ap.set_defaults(**config_defaults)

    return ap


def validate_args(args):
    if args.kerberos and args.ldap:
        print("[!] ERROR: -K and -L are mutually exclusive")
        print("[!] Omit both to alternate between Kerberos and LDAP")
        sys.exit(1)

    if args.enum and args.ldap:
        print("[!] ERROR: Enumeration is Kerberos only and cannot be combined with -L")
        sys.exit(1)

    if args.enum and args.kerberos:
        print("[!] ERROR: -E already implies Kerberos, do not combine it with -K")
        sys.exit(1)

    if not args.host and not args.hostfile:
        print("[!] ERROR: A host is required (-H or -Hostfile)")
        sys.exit(1)

    if not args.user and not args.userfile:
        print("[!] ERROR: A username is required (-U or -Userfile)")
        sys.exit(1)

    if not args.password and not args.enum:
        print("[!] ERROR: A password is required (-P) unless enumerating with -E")
        sys.exit(1)

    if not args.domain:
        print("[!] ERROR: A domain is required (-D)")
        sys.exit(1)

    if args.sleep < 0:
        print("[!] ERROR: --sleep must not be negative")
        sys.exit(1)

    if args.enum and args.password is not None:
        print("[*] Enumeration mode ignores -P")
