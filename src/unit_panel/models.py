from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class ServiceRecord:
    name: str
    description: str = ""
    load_state: str = ""
    active_state: str = ""
    sub_state: str = ""
    unit_file_state: str = ""
    followed_by: tuple[str, ...] = ()

    @property
    def is_active(self) -> bool:
        return self.active_state == "active"

    @property
    def is_running(self) -> bool:
        return self.sub_state == "running"


@dataclass(frozen=True, slots=True)
class UnitStatus:
    name: str
    active_state: str = ""
    sub_state: str = ""
    main_pid: int | None = None

    @property
    def active(self) -> bool:
        return self.active_state == "active"

    @property
    def running(self) -> bool:
        return self.sub_state == "running"


class StatusFilter(str, Enum):
    RUNNING = "running"
    EXITED = "exited"
    DEAD = "dead"
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(slots=True)
class FilterState:
    name: str = ""
    status: StatusFilter | None = None

    def toggle(self, category: StatusFilter) -> None:
        """Select ``category``; selecting the current one again clears it."""
        self.status = None if self.status is category else category


@dataclass(frozen=True, slots=True)
class MutationResult:
    ok: bool
    error: str | None = None

    @classmethod
    def success(cls) -> MutationResult:
        return cls(True)

    @classmethod
    def failure(cls, description: str) -> MutationResult:
        return cls(False, description)
