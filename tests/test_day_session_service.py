from __future__ import annotations

import threading

import pytest

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.modules.assignments.service import AssignmentService
from app.modules.day_session.service import DaySessionService
from app.modules.roster.repository import RosterRepository
from app.modules.roster.schemas import EventKind, SessionStatus
from app.modules.roster.service import RosterService


@pytest.fixture
def day(db_session, clock) -> DaySessionService:
    return DaySessionService(db_session, clock)


@pytest.fixture
def roster(db_session, clock) -> RosterService:
    return RosterService(db_session, clock)


def test_session_starts_inactive(roster) -> None:
    state = roster.get_state()
    assert state.session.status == SessionStatus.inactive
    assert state.sellers == []
    assert state.next_seller is None


def test_start_day_seeds_roster_in_order(day, roster) -> None:
    result = day.start_day(["Alice", "Bob", "Charlie"])
    assert result.next_seller == "Alice"

    state = roster.get_state()
    assert state.session.status == SessionStatus.active
    assert state.session.started_time == "11:30:00"
    assert [s.name for s in state.sellers] == ["Alice", "Bob", "Charlie"]
    assert all(s.sale_count == 0 and s.active_customer is None for s in state.sellers)
    assert state.history[0].kind == EventKind.day_started
    assert "Alice, Bob, Charlie" in state.history[0].message


@pytest.mark.parametrize("names", [[], None, [f"V{i}" for i in range(21)]])
def test_start_day_rejects_bad_roster_size(day, names) -> None:
    with pytest.raises(ValidationError):
        day.start_day(names)


def test_start_day_accepts_twenty_sellers(day, roster) -> None:
    day.start_day([f"V{i}" for i in range(20)])
    assert roster.get_stats().total_sellers == 20


def test_start_day_rejects_duplicates_and_blank_names(day) -> None:
    with pytest.raises(ValidationError):
        day.start_day(["Alice", "Bob", "Alice"])
    with pytest.raises(ValidationError):
        day.start_day(["Alice", "  "])


def test_start_day_replaces_previous_roster(day, roster) -> None:
    day.start_day(["Alice", "Bob"])
    day.start_day(["Charlie"])
    assert [s.name for s in roster.get_state().sellers] == ["Charlie"]


def test_added_seller_at_zero_becomes_next(day, roster, db_session, clock) -> None:
    day.start_day(["Alice", "Bob"])
    assignments = AssignmentService(db_session, clock)
    assignments.record_direct_sale("Alice")
    assignments.record_direct_sale("Bob")

    result = day.add_seller("  Dana  ")
    assert result.seller == "Dana"
    assert result.next_seller == "Dana"
    assert roster.get_state().history[0].kind == EventKind.seller_added


def test_added_seller_ties_go_to_earlier_sellers(day) -> None:
    day.start_day(["Alice", "Bob"])
    assert day.add_seller("Dana").next_seller == "Alice"


def test_add_duplicate_or_blank_seller(day) -> None:
    day.start_day(["Alice"])
    with pytest.raises(ConflictError):
        day.add_seller("Alice")
    with pytest.raises(ValidationError):
        day.add_seller("   ")


def test_add_seller_activates_an_inactive_session(day, roster) -> None:
    day.add_seller("Alice")
    state = roster.get_state()
    assert state.session.status == SessionStatus.active
    assert state.next_seller == "Alice"


def test_remove_seller_keeps_history(day, roster) -> None:
    day.start_day(["Alice", "Bob"])
    result = day.remove_seller("Alice")
    assert result.next_seller == "Bob"

    state = roster.get_state()
    assert [s.name for s in state.sellers] == ["Bob"]
    assert state.history[0].kind == EventKind.seller_removed
    assert any("Alice" in e.message for e in state.history if e.kind == EventKind.day_started)

    with pytest.raises(NotFoundError):
        day.remove_seller("Alice")


def test_end_day_exports_and_clears(day, roster, db_session, clock) -> None:
    day.start_day(["Alice", "Bob", "Charlie"])
    assignments = AssignmentService(db_session, clock)
    assignments.take_customer("Alice")
    assignments.record_sale("Alice")
    assignments.record_direct_sale("Bob")
    assignments.record_direct_sale("Bob")
    taken = assignments.take_customer("Charlie")

    result = day.end_day()
    export = result.export_data

    assert export.statistics.total_sellers == 3
    assert export.statistics.total_sales == 3
    assert export.statistics.average_sales == 1.0
    assert export.closed_date == "14/03/2026"
    assert export.closed_time == "11:30:00"
    assert export.session_started_time == "11:30:00"
    assert export.filename == "tour-de-linea-export-2026-03-14.json"
    assert [s.sale_count for s in export.sellers] == [1, 2, 0]
    assert export.sellers[2].active_customer.id == taken.customer_id
    # Historial completo en orden cronológico
    assert export.history[0].kind == EventKind.day_started
    assert export.history[-1].kind == EventKind.customer_taken
    assert len(export.history) == 6

    state = roster.get_state()
    assert state.sellers == []
    assert state.history == []
    assert state.session.status == SessionStatus.inactive


def test_end_day_on_empty_roster(day) -> None:
    export = day.end_day().export_data
    assert export.statistics.total_sellers == 0
    assert export.statistics.average_sales == 0.0
    assert export.history == []


def test_average_is_rounded_to_one_decimal(day, db_session, clock) -> None:
    day.start_day(["Alice", "Bob", "Charlie"])
    AssignmentService(db_session, clock).record_direct_sale("Alice")
    assert day.end_day().export_data.statistics.average_sales == 0.3


def test_full_history_is_kept_beyond_display_limit(day, roster, db_session, clock) -> None:
    day.start_day(["Alice"])
    assignments = AssignmentService(db_session, clock)
    for _ in range(60):
        assignments.record_direct_sale("Alice")

    assert len(roster.get_state().history) == 50
    assert len(day.end_day().export_data.history) == 61


def test_reset_all_wipes_everything(day, roster, db_session, clock) -> None:
    day.start_day(["Alice", "Bob"])
    day.reset_all()

    state = roster.get_state()
    assert state.sellers == []
    assert state.history == []
    assert state.session.status == SessionStatus.inactive
    assert RosterRepository(db_session, clock).get_config() == {}


# ==================== CIERRE CONCURRENTE ====================

def test_sale_committed_just_before_close_is_exported(file_session_factory, clock, monkeypatch) -> None:
    setup = file_session_factory()
    DaySessionService(setup, clock).start_day(["Alice", "Bob"])
    setup.close()

    take_all_sellers = RosterRepository.take_all_sellers

    def sale_then_take(self):
        other = file_session_factory()
        try:
            AssignmentService(other, clock).record_direct_sale("Alice")
        finally:
            other.close()
        return take_all_sellers(self)

    monkeypatch.setattr(RosterRepository, "take_all_sellers", sale_then_take)

    db = file_session_factory()
    try:
        export = DaySessionService(db, clock).end_day().export_data
    finally:
        db.close()

    assert export.statistics.total_sales == 1
    assert [e.kind for e in export.history] == [EventKind.day_started, EventKind.direct_sale_recorded]

    check = RosterRepository(file_session_factory(), clock)
    assert check.count_sellers() == 0
    assert check.list_events() == []
    check.db.close()


def test_sale_racing_the_close_is_rejected_not_lost(file_session_factory, clock, monkeypatch) -> None:
    setup = file_session_factory()
    DaySessionService(setup, clock).start_day(["Alice"])
    setup.close()

    take_all_sellers = RosterRepository.take_all_sellers
    outcome = {}
    workers = []

    def late_sale():
        other = file_session_factory()
        try:
            AssignmentService(other, clock).record_direct_sale("Alice")
            outcome["result"] = "ok"
        except NotFoundError:
            outcome["result"] = "not_found"
        finally:
            other.close()

    def take_then_race(self):
        rows = take_all_sellers(self)
        # El roster ya está bloqueado para escritura: la venta espera al cierre
        worker = threading.Thread(target=late_sale)
        worker.start()
        workers.append(worker)
        return rows

    monkeypatch.setattr(RosterRepository, "take_all_sellers", take_then_race)

    db = file_session_factory()
    try:
        export = DaySessionService(db, clock).end_day().export_data
    finally:
        db.close()
    workers[0].join(timeout=30)

    assert outcome["result"] == "not_found"
    assert export.statistics.total_sales == 0

    check = RosterRepository(file_session_factory(), clock)
    assert check.count_sellers() == 0
    assert check.list_events() == []
    check.db.close()
