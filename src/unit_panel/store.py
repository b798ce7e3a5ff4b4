from __future__ import annotations

import logging
from typing import Iterable

from .models import ServiceRecord

logger = logging.getLogger(__name__)

Snapshot = tuple[ServiceRecord, ...]


class ServiceStore:
    """Holds the latest successful listing.

    The snapshot is an immutable tuple swapped in one assignment; it is never
    patched. ``loading`` and ``error`` are owned by whoever drives refreshes.
    """

    def __init__(self) -> None:
        self._snapshot: Snapshot | None = None
        self.loading: bool = False
        self.error: str | None = None

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    def current(self) -> Snapshot | None:
        """Latest snapshot, or None until the first successful refresh."""
        return self._snapshot

    def records(self) -> Snapshot:
        return self._snapshot or ()

    def replace(self, records: Iterable[ServiceRecord]) -> None:
        snapshot = tuple(records)
        self._snapshot = snapshot
        self.loading = False
        self.error = None
        logger.debug("snapshot replaced with %d records", len(snapshot))

    def begin_refresh(self) -> None:
        self.loading = True

    def fail(self, message: str) -> None:
        # Keeps the last good snapshot
        self.loading = False
        self.error = message
        logger.warning("refresh failed: %s", message)
