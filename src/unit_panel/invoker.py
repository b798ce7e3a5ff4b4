from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Sequence

from .errors import SpawnFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProcessResult:
    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def exit_success(self) -> bool:
        return self.returncode == 0

    def stderr_text(self) -> str:
        return self.stderr.decode(errors="replace").strip()


class ProcessInvoker:
    """Run an executable with a fixed argument list and capture its output.

    No shell is involved. A non-zero exit is reported through
    ``ProcessResult.exit_success``; only a failure to spawn raises.
    """

    def run(self, command: str, args: Sequence[str]) -> ProcessResult:
        argv = [command, *args]
        logger.debug("exec %s", argv)
        try:
            cp = subprocess.run(argv, stdout=subprocess.PIPE, stderr=subprocess.PIPE, check=False)
        except OSError as e:
            raise SpawnFailure(f"Failed to execute {command}: {e}") from e
        logger.debug("exit %s from %s", cp.returncode, command)
        return ProcessResult(cp.returncode, cp.stdout, cp.stderr)
