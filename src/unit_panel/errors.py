"""Error taxonomy for systemctl invocations and listing decodes.

Every error carries display text in ``str(exc)``; none of them is meant to
terminate the process. Callers surface the text and allow a retry.
"""


class UnitPanelError(Exception):
    """Base class for all unit-panel failures."""


class SpawnFailure(UnitPanelError):
    """The external command could not be launched (missing binary, EACCES)."""


class ExitFailure(UnitPanelError):
    """The external command ran but exited non-zero."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class DecodeError(UnitPanelError):
    """The listing output was not valid JSON."""


class SchemaError(UnitPanelError):
    """The listing output parsed but had no recognizable row collection."""
