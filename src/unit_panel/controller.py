from __future__ import annotations

import asyncio
import logging

from .errors import UnitPanelError
from .filters import filter_records
from .models import FilterState, MutationResult, ServiceRecord
from .store import ServiceStore
from .systemctl import Action, Systemctl

logger = logging.getLogger(__name__)


class ServiceController:
    """Serializes refreshes and mutations against one store.

    A refresh lists, decodes and replaces the snapshot, or records the error
    and leaves the previous snapshot in place. A successful mutation is
    followed by a refresh; a failed one only records the error.
    """

    def __init__(self, systemctl: Systemctl | None = None, store: ServiceStore | None = None) -> None:
        self.systemctl = systemctl or Systemctl()
        self.store = store or ServiceStore()

    @property
    def busy(self) -> bool:
        return self.store.loading

    def refresh(self) -> bool:
        self.store.begin_refresh()
        try:
            records = self.systemctl.list_services()
        except UnitPanelError as e:
            self.store.fail(str(e))
            return False
        finally:
            self.store.loading = False
        self.store.replace(records)
        return True

    def mutate(self, action: Action, name: str) -> MutationResult:
        self.store.begin_refresh()
        try:
            result = self.systemctl.mutate(action, name)
        finally:
            self.store.loading = False
        if not result.ok:
            self.store.fail(result.error or f"{action} {name} failed")
            return result
        self.refresh()
        return result

    def visible(self, state: FilterState) -> list[ServiceRecord]:
        return filter_records(self.store.records(), state)

    async def refresh_async(self) -> bool:
        return await asyncio.to_thread(self.refresh)

    async def mutate_async(self, action: Action, name: str) -> MutationResult:
        return await asyncio.to_thread(self.mutate, action, name)
