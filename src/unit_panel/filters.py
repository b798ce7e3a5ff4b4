from __future__ import annotations

from typing import Iterable

from .models import FilterState, ServiceRecord, StatusFilter


def _status_matches(record: ServiceRecord, status: StatusFilter) -> bool:
    if status is StatusFilter.RUNNING:
        return record.sub_state.lower() == "running"
    if status is StatusFilter.EXITED:
        return record.sub_state.lower() == "exited"
    if status is StatusFilter.DEAD:
        return record.sub_state.lower() == "dead"
    if status is StatusFilter.ACTIVE:
        return record.active_state.lower() == "active"
    if status is StatusFilter.INACTIVE:
        return record.active_state.lower() == "inactive"
    return True


def matches(record: ServiceRecord, state: FilterState) -> bool:
    needle = state.name.strip().casefold()
    if needle and needle not in record.name.casefold():
        return False
    if state.status is None:
        return True
    return _status_matches(record, state.status)


def filter_records(records: Iterable[ServiceRecord], state: FilterState) -> list[ServiceRecord]:
    """Order-preserving subset of ``records`` that pass ``state``."""
    return [r for r in records if matches(r, state)]


def parse_status(value: str | None) -> StatusFilter | None:
    """Map a user-supplied category name to a StatusFilter ("" and None mean no filter)."""
    if not value:
        return None
    try:
        return StatusFilter(value.strip().lower())
    except ValueError:
        choices = ", ".join(s.value for s in StatusFilter)
        raise ValueError(f"Unknown status '{value}'. Choose one of: {choices}") from None
