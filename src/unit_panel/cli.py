import logging
from typing import Optional

import typer

from . import __version__
from .errors import UnitPanelError
from .filters import filter_records, parse_status
from .models import FilterState
from .systemctl import Action, Systemctl
from .util import json_line, record_to_dict, resolve_systemctl_bin, unit_name


app = typer.Typer(
    name="unit-panel",
    add_completion=False,
    no_args_is_help=True,
    help=(
        "Browse and control systemd service units.\n\n"
        "Usage:\n"
        "  unit-panel ls [--name S] [--status C]   List service units (tab-separated)\n"
        "  unit-panel status <unit>                Show ActiveState / SubState / MainPID\n"
        "  unit-panel start|stop|restart|reload <unit>\n"
        "  unit-panel dash                         Open Textual dashboard\n\n"
        "Status categories: running, exited, dead, active, inactive.\n"
        "A bare unit name gets '.service' appended."
    ),
    context_settings={"help_option_names": ["-h", "--help"]},
)


class _Options:
    systemctl: Optional[str] = None
    user: Optional[bool] = None


_opts = _Options()


@app.callback()
def _root(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        is_eager=True,
    ),
    user: Optional[bool] = typer.Option(
        None,
        "--user/--system",
        help="User or system service manager (default: $UNIT_PANEL_USER, else system)",
        show_default=False,
    ),
    systemctl: Optional[str] = typer.Option(
        None,
        "--systemctl",
        help="systemctl binary (default: $UNIT_PANEL_SYSTEMCTL or PATH lookup)",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging to stderr"),
):
    if version:
        typer.echo(__version__)
        raise typer.Exit()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _opts.user = user
    _opts.systemctl = systemctl


def _client() -> Systemctl:
    return Systemctl(binary=resolve_systemctl_bin(_opts.systemctl), user=_opts.user)


@app.command()
def version():
    """Show CLI version (semver)."""
    typer.echo(__version__)


@app.command("ls")
def ls(
    name: str = typer.Option("", "--name", "-n", help="Case-insensitive name substring"),
    status: str = typer.Option("", "--status", "-s", help="running|exited|dead|active|inactive"),
    as_json: bool = typer.Option(False, "--json", help="One JSON object per line"),
):
    """List service units. Prints: name\tactive\tsub\tdescription"""
    try:
        state = FilterState(name=name, status=parse_status(status))
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)
    try:
        records = _client().list_services()
    except UnitPanelError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    for rec in filter_records(records, state):
        if as_json:
            typer.echo(json_line(record_to_dict(rec)))
        else:
            typer.echo(f"{rec.name}\t{rec.active_state}\t{rec.sub_state}\t{rec.description}")


@app.command()
def status(name: str):
    """Show ActiveState, SubState and MainPID for one unit."""
    unit = unit_name(name)
    try:
        st = _client().service_status(unit)
    except UnitPanelError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"name: {st.name}")
    if st.sub_state:
        typer.echo(f"state: {st.active_state or 'unknown'} ({st.sub_state})")
    else:
        typer.echo(f"state: {st.active_state or 'unknown'}")
    typer.echo(f"pid: {st.main_pid if st.main_pid is not None else '-'}")


_PAST = {"start": "started", "stop": "stopped", "restart": "restarted", "reload": "reloaded"}


def _mutate(action: Action, name: str) -> None:
    unit = unit_name(name)
    result = _client().mutate(action, unit)
    if not result.ok:
        typer.echo(f"Failed to {action} {unit}: {result.error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{_PAST[action]} {unit}")


@app.command()
def start(name: str):
    """Start a unit."""
    _mutate("start", name)


@app.command()
def stop(name: str):
    """Stop a unit."""
    _mutate("stop", name)


@app.command()
def restart(name: str):
    """Restart a unit (starts if inactive)."""
    _mutate("restart", name)


@app.command()
def reload(name: str):
    """Ask a unit to reload its configuration."""
    _mutate("reload", name)


@app.command()
def dash():
    """Open the dashboard (Textual UI) over all service units."""
    try:
        import textual  # noqa: F401
    except ImportError:
        typer.echo("Dashboard requires 'textual'. Install it with 'pip install textual'.", err=True)
        raise typer.Exit(code=1)

    # Lazy import to avoid importing Textual at module import time
    from .dash.app import run_dash

    run_dash(_client())
