import pytest

from unit_panel.filters import filter_records, matches, parse_status
from unit_panel.models import FilterState, ServiceRecord, StatusFilter

RUNNING = ServiceRecord("ssh.service", active_state="active", sub_state="running")
EXITED = ServiceRecord("setup.service", active_state="active", sub_state="exited")
DEAD = ServiceRecord("Cron.service", active_state="inactive", sub_state="dead")


@pytest.mark.parametrize(
    "status, expected",
    [
        (StatusFilter.RUNNING, True),
        (StatusFilter.EXITED, False),
        (StatusFilter.DEAD, False),
        (StatusFilter.ACTIVE, True),
        (StatusFilter.INACTIVE, False),
    ],
)
def test_status_clause(status, expected):
    assert matches(RUNNING, FilterState(status=status)) is expected


def test_empty_filter_matches_everything():
    state = FilterState()
    assert all(matches(r, state) for r in (RUNNING, EXITED, DEAD, ServiceRecord("x")))


def test_name_clause_is_case_insensitive_and_trimmed():
    assert matches(DEAD, FilterState(name="  cRoN "))
    assert not matches(DEAD, FilterState(name="ssh"))


def test_status_compare_ignores_case():
    rec = ServiceRecord("a.service", active_state="ACTIVE", sub_state="Running")
    assert matches(rec, FilterState(status=StatusFilter.RUNNING))
    assert matches(rec, FilterState(status=StatusFilter.ACTIVE))


def test_clauses_are_anded():
    assert not matches(RUNNING, FilterState(name="cron", status=StatusFilter.RUNNING))
    assert matches(DEAD, FilterState(name="cron", status=StatusFilter.DEAD))


def test_filter_preserves_order_and_identity():
    records = (DEAD, RUNNING, EXITED)
    out = filter_records(records, FilterState(status=StatusFilter.ACTIVE))
    assert out == [RUNNING, EXITED]
    assert out[0] is RUNNING


def test_end_to_end_filters():
    rec = ServiceRecord("a.service", active_state="active", sub_state="running")
    assert filter_records([rec], FilterState(name="a", status=StatusFilter.RUNNING)) == [rec]
    assert filter_records([rec], FilterState(name="b")) == []


def test_toggle_selects_switches_and_clears():
    state = FilterState()
    state.toggle(StatusFilter.RUNNING)
    assert state.status is StatusFilter.RUNNING
    state.toggle(StatusFilter.DEAD)
    assert state.status is StatusFilter.DEAD
    state.toggle(StatusFilter.DEAD)
    assert state.status is None


def test_parse_status():
    assert parse_status("") is None
    assert parse_status(None) is None
    assert parse_status(" Running ") is StatusFilter.RUNNING
    with pytest.raises(ValueError, match="Unknown status 'failed'"):
        parse_status("failed")
