"""Tests for the territory triage ordering and rest window."""

from datetime import datetime, timedelta, timezone

from territory_hub.domain.entities.territory import HistoryEntry, Territory
from territory_hub.domain.policies.triage import (
    available_for_assignment,
    is_resting,
    natural_key,
    sort_for_triage,
)
from territory_hub.domain.value_objects.enums import TerritoryStatus

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _territory(tid, name, status=TerritoryStatus.AVAILABLE, worked_days_ago=None):
    history = []
    if worked_days_ago is not None:
        history.append(
            HistoryEntry(
                user_id=9, user_name="P",
                completed_date=NOW - timedelta(days=worked_days_ago),
            )
        )
    return Territory(id=tid, name=name, map_url=f"/maps/{tid}.pdf", status=status, history=history)


def _names(territories):
    return [t.name for t in territories]


# ─── Natural key ─────────────────────────────────────────────────────


def test_natural_key_numeric_aware():
    names = ["T10", "T2", "t1"]
    assert sorted(names, key=natural_key) == ["t1", "T2", "T10"]


def test_natural_key_plain_numbers():
    assert sorted(["10", "9", "100"], key=natural_key) == ["9", "10", "100"]


# ─── Rest window ─────────────────────────────────────────────────────


def test_never_worked_is_not_resting():
    assert is_resting(_territory(1, "A"), NOW) is False


def test_recent_completion_is_resting():
    assert is_resting(_territory(1, "A", worked_days_ago=59), NOW) is True


def test_completion_at_sixty_days_is_eligible():
    assert is_resting(_territory(1, "A", worked_days_ago=60), NOW) is False


def test_rest_window_is_configurable():
    t = _territory(1, "A", worked_days_ago=20)
    assert is_resting(t, NOW, rest_days=14) is False
    assert is_resting(t, NOW, rest_days=30) is True


def test_resting_uses_latest_entry_not_list_order():
    t = _territory(1, "A", worked_days_ago=200)
    t.history.insert(
        0, HistoryEntry(user_id=9, user_name="P", completed_date=NOW - timedelta(days=5))
    )
    assert is_resting(t, NOW) is True


def test_naive_completion_dates_are_treated_as_utc():
    t = _territory(1, "A")
    t.history.append(
        HistoryEntry(user_id=9, user_name="P", completed_date=datetime(2025, 5, 30, 12, 0))
    )
    assert is_resting(t, NOW) is True


# ─── Ordering chain ──────────────────────────────────────────────────


def test_in_use_territories_go_last():
    items = [
        _territory(1, "A", status=TerritoryStatus.IN_USE),
        _territory(2, "B"),
    ]
    assert _names(sort_for_triage(items, NOW)) == ["B", "A"]


def test_never_worked_first():
    items = [
        _territory(1, "A", worked_days_ago=300),
        _territory(2, "B"),
    ]
    assert _names(sort_for_triage(items, NOW)) == ["B", "A"]


def test_rested_before_recently_closed():
    items = [
        _territory(1, "Recent", worked_days_ago=10),
        _territory(2, "Rested", worked_days_ago=90),
    ]
    assert _names(sort_for_triage(items, NOW)) == ["Rested", "Recent"]


def test_oldest_last_work_first_within_group():
    items = [
        _territory(1, "A", worked_days_ago=70),
        _territory(2, "B", worked_days_ago=400),
        _territory(3, "C", worked_days_ago=120),
    ]
    assert _names(sort_for_triage(items, NOW)) == ["B", "C", "A"]


def test_name_tie_break_is_numeric_aware():
    items = [_territory(1, "T10"), _territory(2, "T2"), _territory(3, "T1")]
    assert _names(sort_for_triage(items, NOW)) == ["T1", "T2", "T10"]


def test_full_chain():
    items = [
        _territory(1, "InUse", status=TerritoryStatus.IN_USE),
        _territory(2, "Recent", worked_days_ago=3),
        _territory(3, "Old", worked_days_ago=500),
        _territory(4, "Fresh 2"),
        _territory(5, "Middle", worked_days_ago=100),
        _territory(6, "Fresh 10"),
        _territory(7, "Closed", status=TerritoryStatus.CLOSED, worked_days_ago=30),
    ]
    assert _names(sort_for_triage(items, NOW)) == [
        "Fresh 2", "Fresh 10", "Old", "Middle", "Closed", "Recent", "InUse",
    ]


# ─── Assignment picker ───────────────────────────────────────────────


def test_available_for_assignment_filters_and_sorts_by_name():
    items = [
        _territory(1, "T10"),
        _territory(2, "T9", status=TerritoryStatus.IN_USE),
        _territory(3, "T2"),
        _territory(4, "T3", status=TerritoryStatus.CLOSED),
    ]
    assert _names(available_for_assignment(items)) == ["T2", "T10"]
