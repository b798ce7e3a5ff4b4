from __future__ import annotations

import logging
from typing import Literal

from .decoder import decode_unit_status, decode_units
from .errors import ExitFailure, SpawnFailure
from .invoker import ProcessInvoker, ProcessResult
from .models import MutationResult, ServiceRecord, UnitStatus
from .util import resolve_systemctl_bin, user_scope_default

logger = logging.getLogger(__name__)


LIST_ARGS: tuple[str, ...] = ("list-units", "--type=service", "--all", "--no-pager", "--output=json")
STATUS_PROPERTIES = "ActiveState,SubState,MainPID"

Action = Literal["start", "stop", "restart", "reload"]
ACTIONS: tuple[Action, ...] = ("start", "stop", "restart", "reload")


def list_args() -> list[str]:
    return list(LIST_ARGS)


def show_args(name: str) -> list[str]:
    return ["show", name, f"--property={STATUS_PROPERTIES}", "--no-pager"]


def action_args(action: Action, name: str) -> list[str]:
    if action not in ACTIONS:
        raise ValueError(f"unsupported action: {action}")
    return [action, name]


class Systemctl:
    """systemctl bound to a binary and a manager scope (system or --user)."""

    def __init__(
        self,
        invoker: ProcessInvoker | None = None,
        binary: str | None = None,
        user: bool | None = None,
    ) -> None:
        self.invoker = invoker or ProcessInvoker()
        self.binary = binary or resolve_systemctl_bin()
        self.user = user_scope_default() if user is None else user

    def _scoped(self, args: list[str]) -> list[str]:
        return ["--user", *args] if self.user else args

    def _run(self, args: list[str]) -> ProcessResult:
        return self.invoker.run(self.binary, self._scoped(args))

    def list_services(self) -> list[ServiceRecord]:
        """Snapshot of all service units.

        Raises SpawnFailure, ExitFailure, DecodeError or SchemaError.
        """
        result = self._run(list_args())
        if not result.exit_success:
            detail = result.stderr_text() or f"exit status {result.returncode}"
            raise ExitFailure(f"systemctl command failed: {detail}", result.returncode)
        return decode_units(result.stdout)

    def service_status(self, name: str) -> UnitStatus:
        result = self._run(show_args(name))
        if not result.exit_success:
            detail = result.stderr_text() or f"exit status {result.returncode}"
            raise ExitFailure(f"systemctl command failed: {detail}", result.returncode)
        return decode_unit_status(name, result.stdout)

    def mutate(self, action: Action, name: str) -> MutationResult:
        try:
            result = self._run(action_args(action, name))
        except SpawnFailure as e:
            logger.warning("%s %s: %s", action, name, e)
            return MutationResult.failure(str(e))
        if result.exit_success:
            logger.debug("%s %s ok", action, name)
            return MutationResult.success()
        message = result.stderr_text() or (
            f"systemctl {action} {name} failed with exit status {result.returncode}"
        )
        logger.warning("%s %s failed: %s", action, name, message)
        return MutationResult.failure(message)

    def start(self, name: str) -> MutationResult:
        return self.mutate("start", name)

    def stop(self, name: str) -> MutationResult:
        return self.mutate("stop", name)

    def restart(self, name: str) -> MutationResult:
        return self.mutate("restart", name)

    def reload(self, name: str) -> MutationResult:
        return self.mutate("reload", name)
