"""Request schemas — field bounds and cross-field checks enforced before any service runs.

Invariants:
    - Event datetimes are normalised to aware UTC; naive input is read as UTC
    - start_date must precede end_date
    - Suggestion responses cannot set a status other than accepted/rejected/postponed
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from aurora.core.domain_types import EventPriority
from aurora.schemas.event import EventCreate
from aurora.schemas.preferences import UserPreferencesUpdate
from aurora.schemas.recommendation import RecommendationFeedbackCreate
from aurora.schemas.schedule_suggestion import RespondToSuggestion
from aurora.schemas.self_care import SelfCareFeedback, SelfCareRequest


# --- EventCreate ----------------------------------------------------------------

def test_event_dates_normalised_to_utc():
    event = EventCreate(
        title=" Yoga ",
        start_date="2030-01-01T07:00:00-03:00",
        end_date="2030-01-01T11:00:00",
    )
    assert event.title == "Yoga"
    assert event.start_date == datetime(2030, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert event.end_date.tzinfo is not None
    assert event.priority == EventPriority.MEDIUM


def test_event_range_must_be_positive():
    with pytest.raises(ValidationError):
        EventCreate(title="x", start_date="2030-01-01T08:00:00Z", end_date="2030-01-01T08:00:00Z")


def test_event_color_must_be_hex():
    with pytest.raises(ValidationError):
        EventCreate(
            title="x", color="red",
            start_date="2030-01-01T08:00:00Z", end_date="2030-01-01T09:00:00Z",
        )


def test_event_offset_bounded():
    with pytest.raises(ValidationError):
        EventCreate(
            title="x", timezone_offset_minutes=900,
            start_date="2030-01-01T08:00:00Z", end_date="2030-01-01T09:00:00Z",
        )


# --- Preferences ----------------------------------------------------------------

def test_preference_days_deduplicated_and_sorted():
    update = UserPreferencesUpdate(work_days_of_week=[5, 1, 1, 3])
    assert update.work_days_of_week == [1, 3, 5]


def test_preference_work_hours_ordered():
    with pytest.raises(ValidationError):
        UserPreferencesUpdate(work_start_time="18:00", work_end_time="09:00")


# --- Feedback and suggestions ---------------------------------------------------

def test_feedback_id_is_stripped():
    feedback = RecommendationFeedbackCreate(recommendation_id="  abc ", accepted=True)
    assert feedback.recommendation_id == "abc"


def test_feedback_id_cannot_be_blank():
    with pytest.raises(ValidationError):
        RecommendationFeedbackCreate(recommendation_id="   ", accepted=True)


def test_suggestion_response_status_restricted():
    assert RespondToSuggestion(status="postponed").status == "postponed"
    with pytest.raises(ValidationError):
        RespondToSuggestion(status="pending")


def test_self_care_request_bounds():
    assert SelfCareRequest().count == 5
    with pytest.raises(ValidationError):
        SelfCareRequest(count=11)
    with pytest.raises(ValidationError):
        SelfCareFeedback(recommendation_id="x", action="celebrated")
