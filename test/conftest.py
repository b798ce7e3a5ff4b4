from __future__ import annotations

from typing import Sequence

import pytest

from unit_panel.errors import SpawnFailure
from unit_panel.invoker import ProcessResult
from unit_panel.systemctl import Systemctl


class FakeInvoker:
    """Stands in for ProcessInvoker; replies are keyed by the first systemctl verb."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str]]] = []
        self.replies: dict[str, ProcessResult | Exception] = {}

    def reply(self, verb: str, stdout: bytes | str = b"", stderr: bytes | str = b"", rc: int = 0) -> None:
        if isinstance(stdout, str):
            stdout = stdout.encode()
        if isinstance(stderr, str):
            stderr = stderr.encode()
        self.replies[verb] = ProcessResult(rc, stdout, stderr)

    def fail_spawn(self, verb: str, message: str = "No such file or directory") -> None:
        self.replies[verb] = SpawnFailure(f"Failed to execute systemctl: {message}")

    def run(self, command: str, args: Sequence[str]) -> ProcessResult:
        args = list(args)
        self.calls.append((command, args))
        verb = next(a for a in args if not a.startswith("--"))
        reply = self.replies.get(verb, ProcessResult(0, b"", b""))
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture
def systemctl(invoker: FakeInvoker) -> Systemctl:
    return Systemctl(invoker=invoker, binary="systemctl", user=False)
