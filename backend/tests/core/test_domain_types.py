"""Domain Types — vocabularies and the active-seat status set."""

from app.core.domain_types import (
    ACTIVE_PARTICIPANT_STATUSES, ParticipantStatus, RequestStatus, SessionStatus,
)


def test_request_status_values():
    assert {s.value for s in RequestStatus} == {
        "pending", "approved", "rejected", "completed",
    }


def test_session_status_uses_hyphenated_in_progress():
    assert SessionStatus.IN_PROGRESS.value == "in-progress"


def test_active_statuses_match_plain_strings():
    assert "registered" in ACTIVE_PARTICIPANT_STATUSES
    assert "attended" in ACTIVE_PARTICIPANT_STATUSES
    assert ParticipantStatus.NO_SHOW.value not in ACTIVE_PARTICIPANT_STATUSES
    assert "cancelled" not in ACTIVE_PARTICIPANT_STATUSES
