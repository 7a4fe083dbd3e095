"""Lifecycle Rules — request/session creation, status changes and full replace."""

from datetime import timedelta

import pytest

from app.core.errors import InvalidInputError
from app.core.lifecycle import (
    apply_request_status, apply_session_replace, build_request,
    link_request_session, prepare_new_session, sort_requests_newest_first,
    sort_sessions_by_start, validate_request_status, validate_session_status,
)
from factories import NOW, make_request, make_session


def test_new_request_is_pending():
    r = build_request("Kubernetes", "Ops", "Technical", 3, NOW)
    assert r.status == "pending"
    assert r.created_at == NOW
    assert r.training_session_id is None


def test_any_request_status_may_follow_any_other():
    r = make_request(status="completed")
    apply_request_status(r, "pending", NOW)
    assert r.status == "pending"
    assert r.updated_at == NOW


def test_unknown_request_status_rejected():
    with pytest.raises(InvalidInputError):
        validate_request_status("archived")


def test_link_request_session_reassigns():
    r = make_request()
    link_request_session(r, 4, NOW)
    link_request_session(r, 5, NOW)
    assert r.training_session_id == 5
    assert r.updated_at == NOW


def test_requests_sorted_newest_first():
    old = make_request(created_at=NOW - timedelta(days=2), request_id=1)
    new = make_request(created_at=NOW, request_id=2)
    assert sort_requests_newest_first([old, new]) == [new, old]


def test_in_progress_is_a_session_status():
    assert validate_session_status("in-progress") == "in-progress"
    with pytest.raises(InvalidInputError):
        validate_session_status("in_progress")


def test_prepare_new_session_resets_counter_and_status():
    s = make_session(session_id=None, current=5, max_participants=10, status="completed")
    prepare_new_session(s, NOW)
    assert s.current_participants == 0
    assert s.status == "scheduled"
    assert s.created_at == NOW


def test_session_window_must_not_be_inverted():
    s = make_session(session_id=None)
    s.end_date = s.start_date - timedelta(minutes=1)
    with pytest.raises(InvalidInputError):
        prepare_new_session(s, NOW)


def test_replace_keeps_identity_and_counter():
    existing = make_session(session_id=3, max_participants=10, current=4)
    replacement = make_session(session_id=None, max_participants=8, current=0)
    replacement.title = "Advanced Python"
    replacement.status = "in-progress"

    result = apply_session_replace(existing, replacement, NOW)

    assert result.id == 3
    assert result.current_participants == 4
    assert result.created_at == existing.created_at
    assert result.title == "Advanced Python"
    assert result.status == "in-progress"
    assert result.updated_at == NOW


def test_replace_cannot_shrink_below_taken_seats():
    existing = make_session(session_id=3, max_participants=10, current=4)
    replacement = make_session(session_id=None, max_participants=3)
    with pytest.raises(InvalidInputError):
        apply_session_replace(existing, replacement, NOW)


def test_sessions_sorted_by_start():
    later = make_session(session_id=1, start_in_days=9)
    sooner = make_session(session_id=2, start_in_days=1)
    assert sort_sessions_by_start([later, sooner]) == [sooner, later]
