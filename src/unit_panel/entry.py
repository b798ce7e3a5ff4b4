import sys
from typing import List

from .cli import app


SUBCOMMANDS = {
    "ls",
    "status",
    "start",
    "stop",
    "restart",
    "reload",
    "dash",
    "version",
}

UNIT_ACTIONS = {"status", "start", "stop", "restart", "reload"}


def rewrite_argv(argv: List[str]) -> List[str]:
    """Turn the unit-first shorthand into a regular subcommand line.

    ``unit-panel nginx.service restart`` -> ``restart nginx.service``;
    a unit with no action shows its status. Anything else passes through.
    """
    if not argv:
        return argv
    first = argv[0]
    if first.startswith("-") or first in SUBCOMMANDS or not first.endswith(".service"):
        return argv
    action = argv[1] if len(argv) > 1 else "status"
    if action not in UNIT_ACTIONS:
        # Unknown action after a unit name; let Typer print help
        return argv
    return [action, first, *argv[2:]]


def main(argv: List[str] | None = None):
    if argv is None:
        argv = sys.argv[1:]
    return app(args=rewrite_argv(list(argv)), prog_name="unit-panel")
