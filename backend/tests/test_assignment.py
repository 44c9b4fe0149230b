"""Tests for the assignment rule engine: exactly one owner per request."""
import threading

import pytest

from helpdesk.errors import NotFoundError, PermissionDeniedError
from helpdesk.models.profile import Role
from helpdesk.models.request import RequestStatus, TicketRequest
from helpdesk.services import assignment_service, request_service
from tests.conftest import make_profile, request_fields


def _open_ticket(db):
    user = make_profile(db, "u1@example.com")
    return request_service.create_request(db, user.profile_id, request_fields())


class TestAssignToSelf:

    @pytest.mark.parametrize("role", [Role.it_member, Role.admin])
    def test_staff_takes_open_request(self, db, role):
        ticket = _open_ticket(db)
        tech = make_profile(db, "tech@example.com", role)

        assert assignment_service.assign_to_self(db, ticket.request_id, tech.profile_id) is True

        stored = request_service.get_request(db, ticket.request_id)
        assert stored.status == RequestStatus.en_cours
        assert stored.assigned_to == tech.profile_id
        assert stored.assignee.email == "tech@example.com"
        assert stored.closed_at is None

    def test_second_taker_loses_and_state_is_unchanged(self, db):
        ticket = _open_ticket(db)
        first = make_profile(db, "first@example.com", Role.it_member)
        second = make_profile(db, "second@example.com", Role.it_member)

        assert assignment_service.assign_to_self(db, ticket.request_id, first.profile_id) is True
        assert assignment_service.assign_to_self(db, ticket.request_id, second.profile_id) is False

        stored = request_service.get_request(db, ticket.request_id)
        assert stored.assigned_to == first.profile_id
        assert stored.status == RequestStatus.en_cours

    def test_same_actor_twice_only_wins_once(self, db):
        ticket = _open_ticket(db)
        tech = make_profile(db, "tech@example.com", Role.it_member)
        assert assignment_service.assign_to_self(db, ticket.request_id, tech.profile_id) is True
        assert assignment_service.assign_to_self(db, ticket.request_id, tech.profile_id) is False

    def test_stale_reader_cannot_overwrite(self, session_factory):
        """Both callers saw the request open; the conditional write picks one."""
        with session_factory() as s:
            ticket = _open_ticket(s)
            a = make_profile(s, "a@example.com", Role.it_member)
            b = make_profile(s, "b@example.com", Role.it_member)
            request_id, a_id, b_id = ticket.request_id, a.profile_id, b.profile_id

        with session_factory() as s1, session_factory() as s2:
            seen_by_a = s1.get(TicketRequest, request_id)
            assert seen_by_a.assigned_to is None
            s1.commit()
            seen_by_b = s2.get(TicketRequest, request_id)
            assert seen_by_b.assigned_to is None
            s2.commit()

            assert assignment_service.assign_to_self(s1, request_id, a_id) is True
            assert assignment_service.assign_to_self(s2, request_id, b_id) is False

        with session_factory() as s:
            assert s.get(TicketRequest, request_id).assigned_to == a_id

    def test_missing_request_returns_false(self, db):
        tech = make_profile(db, "tech@example.com", Role.it_member)
        assert assignment_service.assign_to_self(db, "missing", tech.profile_id) is False

    def test_closed_request_returns_false(self, db):
        ticket = _open_ticket(db)
        tech = make_profile(db, "tech@example.com", Role.it_member)
        admin = make_profile(db, "admin@example.com", Role.admin)
        assignment_service.assign_to_self(db, ticket.request_id, tech.profile_id)
        request_service.close_request(db, ticket.request_id, tech.profile_id)

        assert assignment_service.assign_to_self(db, ticket.request_id, admin.profile_id) is False
        assert request_service.get_request(db, ticket.request_id).assigned_to == tech.profile_id

    def test_plain_user_is_denied(self, db):
        ticket = _open_ticket(db)
        other = make_profile(db, "other@example.com")
        with pytest.raises(PermissionDeniedError):
            assignment_service.assign_to_self(db, ticket.request_id, other.profile_id)
        stored = request_service.get_request(db, ticket.request_id)
        assert stored.status == RequestStatus.ouvert
        assert stored.assigned_to is None

    def test_unknown_actor(self, db):
        ticket = _open_ticket(db)
        with pytest.raises(NotFoundError):
            assignment_service.assign_to_self(db, ticket.request_id, "ghost")


class TestConcurrentAssignment:
    """N simultaneous takers on one open request → exactly one winner."""

    @pytest.mark.parametrize("takers", [2, 5])
    def test_exactly_one_winner(self, session_factory, takers):
        with session_factory() as s:
            request_id = _open_ticket(s).request_id
            actor_ids = [
                make_profile(s, f"tech{i}@example.com", Role.it_member if i % 2 else Role.admin).profile_id
                for i in range(takers)
            ]

        barrier = threading.Barrier(takers)
        results: dict[str, bool] = {}
        errors: list[BaseException] = []

        def _take(actor_id):
            session = session_factory()
            try:
                barrier.wait()
                results[actor_id] = assignment_service.assign_to_self(session, request_id, actor_id)
            except BaseException as exc:  # surfaced below
                errors.append(exc)
            finally:
                session.close()

        threads = [threading.Thread(target=_take, args=(actor_id,)) for actor_id in actor_ids]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)

        assert not errors
        winners = [actor_id for actor_id, won in results.items() if won]
        assert len(results) == takers
        assert len(winners) == 1

        with session_factory() as s:
            stored = s.get(TicketRequest, request_id)
            assert stored.assigned_to == winners[0]
            assert stored.status == RequestStatus.en_cours
