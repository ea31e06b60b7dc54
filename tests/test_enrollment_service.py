"""
Tests for EnrollmentService: booking, cancellation and the waitlist.
"""

import threading
from datetime import timedelta

import pytest

from domain.models.session import EnrollmentStatus
from services import error_codes
from tests.conftest import FIXED_NOW, make_player, make_session


@pytest.fixture
def session(session_repo):
    session = make_session()
    session_repo.add(session)
    return session


@pytest.fixture
def tiny_session(session_repo):
    """Capacity-1 session starting 48h from the pinned clock."""
    session = make_session("tiny", capacity=1)
    session_repo.add(session)
    return session


class TestBooking:
    def test_book_enrolls_player(self, enrollment_service, session):
        player = make_player(1)

        result = enrollment_service.book(session.session_id, player)

        assert result.success
        assert session.enrolled == [player]
        assert enrollment_service.get_status(session.session_id, player.id).value == EnrollmentStatus.ENROLLED

    def test_book_twice_is_already_registered(self, enrollment_service, session):
        player = make_player(1)
        enrollment_service.book(session.session_id, player)

        result = enrollment_service.book(session.session_id, player)

        assert result.error_code == error_codes.ALREADY_REGISTERED
        assert len(session.enrolled) == 1

    def test_full_session_rejects_and_leaves_roster_unchanged(self, enrollment_service, tiny_session):
        first, second = make_player(1), make_player(2)
        assert enrollment_service.book("tiny", first).success

        result = enrollment_service.book("tiny", second)

        assert not result.success
        assert result.error_code == error_codes.SESSION_FULL
        assert tiny_session.enrolled == [first]
        assert tiny_session.waitlist == []

    def test_enrolled_never_exceeds_capacity(self, enrollment_service, session_repo):
        session = make_session("small", capacity=3)
        session_repo.add(session)

        outcomes = [enrollment_service.book("small", make_player(i)) for i in range(6)]

        assert [r.success for r in outcomes] == [True, True, True, False, False, False]
        assert len(session.enrolled) == 3

    def test_concurrent_bookings_respect_capacity(self, enrollment_service, session_repo):
        session = make_session("race", capacity=5)
        session_repo.add(session)
        barrier = threading.Barrier(20)

        def worker(index):
            barrier.wait()
            enrollment_service.book("race", make_player(index))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(session.enrolled) == 5
        assert len({p.id for p in session.enrolled}) == 5


class TestCancellation:
    def test_cancel_more_than_12_hours_out(self, enrollment_service, session_repo):
        session = make_session("later", hours_from_now=13)
        session_repo.add(session)
        player = make_player(1)
        enrollment_service.book("later", player)

        result = enrollment_service.cancel("later", player.id)

        assert result.success
        assert session.enrolled == []

    def test_cancel_inside_window_is_refused(self, enrollment_service, session_repo):
        session = make_session("soon", hours_from_now=10)
        session_repo.add(session)
        player = make_player(1)
        enrollment_service.book("soon", player)

        result = enrollment_service.cancel("soon", player.id)

        assert result.error_code == error_codes.CANCELLATION_WINDOW_CLOSED
        assert session.enrolled == [player]

    def test_exactly_12_hours_is_closed(self, enrollment_service, session_repo):
        session_repo.add(make_session("edge", hours_from_now=12))
        player = make_player(1)
        enrollment_service.book("edge", player)

        result = enrollment_service.cancel("edge", player.id)

        assert result.error_code == error_codes.CANCELLATION_WINDOW_CLOSED

    def test_clock_is_read_on_every_cancel(self, enrollment_service, session_repo, clock):
        """A window that was open when the page loaded can close before the click."""
        session = make_session("drift", hours_from_now=13)
        session_repo.add(session)
        player = make_player(1)
        enrollment_service.book("drift", player)

        clock.advance(hours=2)
        result = enrollment_service.cancel("drift", player.id)

        assert result.error_code == error_codes.CANCELLATION_WINDOW_CLOSED
        assert session.enrolled == [player]

    def test_cancel_when_not_booked(self, enrollment_service, session):
        result = enrollment_service.cancel(session.session_id, "user-99")
        assert result.error_code == error_codes.NOT_ENROLLED

    def test_cancel_does_not_promote_waitlist(self, enrollment_service, tiny_session):
        booked, waiting = make_player(1), make_player(2)
        enrollment_service.book("tiny", booked)
        enrollment_service.join_waitlist("tiny", waiting)

        enrollment_service.cancel("tiny", booked.id)

        assert tiny_session.enrolled == []
        assert tiny_session.waitlist == [waiting]


class TestWaitlist:
    def test_join_waitlist_appends_in_order(self, enrollment_service, tiny_session):
        enrollment_service.book("tiny", make_player(0))
        for i in (1, 2, 3):
            assert enrollment_service.join_waitlist("tiny", make_player(i)).success

        assert [p.id for p in tiny_session.waitlist] == ["user-1", "user-2", "user-3"]

    def test_join_waitlist_when_booked(self, enrollment_service, tiny_session):
        player = make_player(1)
        enrollment_service.book("tiny", player)

        result = enrollment_service.join_waitlist("tiny", player)

        assert result.error_code == error_codes.ALREADY_REGISTERED
        assert tiny_session.waitlist == []

    def test_join_waitlist_twice(self, enrollment_service, tiny_session):
        enrollment_service.book("tiny", make_player(0))
        player = make_player(1)
        enrollment_service.join_waitlist("tiny", player)

        result = enrollment_service.join_waitlist("tiny", player)

        assert result.error_code == error_codes.ALREADY_WAITLISTED
        assert len(tiny_session.waitlist) == 1

    def test_leave_waitlist(self, enrollment_service, tiny_session):
        enrollment_service.book("tiny", make_player(0))
        player = make_player(1)
        enrollment_service.join_waitlist("tiny", player)

        result = enrollment_service.leave_waitlist("tiny", player.id)

        assert result.success
        assert tiny_session.waitlist == []

    def test_leave_waitlist_when_not_waiting(self, enrollment_service, tiny_session):
        result = enrollment_service.leave_waitlist("tiny", "user-5")
        assert result.error_code == error_codes.NOT_WAITLISTED

    def test_waitlisted_player_books_freed_slot(self, enrollment_service, tiny_session):
        booked, waiting = make_player(1), make_player(2)
        enrollment_service.book("tiny", booked)
        enrollment_service.join_waitlist("tiny", waiting)
        enrollment_service.cancel("tiny", booked.id)

        result = enrollment_service.book("tiny", waiting)

        assert result.success
        assert tiny_session.enrolled == [waiting]
        assert tiny_session.waitlist == []

    def test_waitlisted_player_booking_full_session(self, enrollment_service, tiny_session):
        enrollment_service.book("tiny", make_player(1))
        waiting = make_player(2)
        enrollment_service.join_waitlist("tiny", waiting)

        result = enrollment_service.book("tiny", waiting)

        assert result.error_code == error_codes.ALREADY_WAITLISTED
        assert tiny_session.waitlist == [waiting]

    def test_player_is_never_in_both_lists(self, enrollment_service, tiny_session):
        player = make_player(1)
        enrollment_service.join_waitlist("tiny", player)
        enrollment_service.book("tiny", player)

        enrolled_ids = {p.id for p in tiny_session.enrolled}
        waitlist_ids = {p.id for p in tiny_session.waitlist}
        assert enrolled_ids == {player.id}
        assert enrolled_ids.isdisjoint(waitlist_ids)


class TestMissingSession:
    @pytest.mark.parametrize("operation", ["book", "join_waitlist"])
    def test_player_operations(self, enrollment_service, operation):
        result = getattr(enrollment_service, operation)("nope", make_player(1))
        assert result.error_code == error_codes.SESSION_NOT_FOUND

    @pytest.mark.parametrize("operation", ["cancel", "leave_waitlist", "get_status"])
    def test_id_operations(self, enrollment_service, operation):
        result = getattr(enrollment_service, operation)("nope", "user-1")
        assert result.error_code == error_codes.SESSION_NOT_FOUND


class TestListings:
    def test_finished_sessions_drop_out_after_grace(self, enrollment_service, session_repo):
        long_over = make_session("long-over", hours_from_now=-4)  # ended 2h ago
        just_over = make_session("just-over", hours_from_now=-2.5)  # ended 30m ago
        upcoming = make_session("upcoming", hours_from_now=24)
        for s in (long_over, just_over, upcoming):
            session_repo.add(s)

        visible = [s.session_id for s in enrollment_service.visible_sessions()]

        assert visible == ["just-over", "upcoming"]

    def test_upcoming_and_available_split_by_involvement(self, enrollment_service, session_repo):
        for name, hours in (("a", 24), ("b", 48), ("c", 72)):
            session_repo.add(make_session(name, hours_from_now=hours))
        player = make_player(1)
        enrollment_service.book("a", player)
        enrollment_service.join_waitlist("c", player)

        upcoming = [s.session_id for s in enrollment_service.upcoming_sessions_for(player.id)]
        available = [s.session_id for s in enrollment_service.available_sessions_for(player.id)]

        assert upcoming == ["a", "c"]
        assert available == ["b"]

    def test_explicit_now_overrides_clock(self, enrollment_service, session_repo):
        session_repo.add(make_session("s", hours_from_now=1))
        later = FIXED_NOW + timedelta(days=2)
        assert enrollment_service.visible_sessions(now=later) == []
