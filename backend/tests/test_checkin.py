"""Tests for server-side check-in validation and attendance recording.

Covers:
- In-session, RSVP'd, inside the geofence → recorded once
- Outside the session window → 400 EventNotInSession
- Not RSVP'd → 403 NotRSVPed
- Second check-in → 409 AlreadyCheckedIn, no duplicate entry
- Outside check_in_radius → 403 OutsideCheckInRadius
- Events without coordinates skip the geofence
- Payload validation
"""
from datetime import date, datetime, time, timedelta

import pytest
import pytz

from app.errors import AlreadyCheckedIn, EventNotInSession, NotRSVPed, OutsideCheckInRadius
from app.models.event import Event
from app.services.checkin_service import distance_to_event_m, record_attendance, validate_check_in
from tests.conftest import FAR_AWAY, NEARBY, VENUE, auth_headers, create_test_event, local_now

TZ = pytz.timezone("America/Phoenix")


def _check_in(client, event_id, user_id, point=NEARBY, accuracy=15.0):
    return client.post(
        f"/events/checkin/{event_id}",
        json={"latitude": point[0], "longitude": point[1], "accuracy": accuracy},
        headers=auth_headers(user_id),
    )


def _rsvp(client, event_id, user_id):
    resp = client.post(f"/events/rsvp/{event_id}", headers=auth_headers(user_id))
    assert resp.status_code == 200, resp.text


class TestCheckInEndpoint:

    def test_successful_check_in(self, client, db, admin_headers):
        event = create_test_event(client, admin_headers)
        _rsvp(client, event["id"], "u1")

        resp = _check_in(client, event["id"], "u1")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Checked in successfully"}

        db.expire_all()
        row = db.query(Event).filter(Event.id == event["id"]).first()
        assert row.event_attending == ["u1"]

    def test_second_check_in_rejected_without_duplicate(self, client, db, admin_headers):
        event = create_test_event(client, admin_headers)
        _rsvp(client, event["id"], "u1")
        _check_in(client, event["id"], "u1")

        resp = _check_in(client, event["id"], "u1")
        assert resp.status_code == 409
        assert resp.json()["code"] == "AlreadyCheckedIn"
        db.expire_all()
        assert db.query(Event).filter(Event.id == event["id"]).first().event_attending == ["u1"]

    def test_not_rsvped(self, client, admin_headers):
        event = create_test_event(client, admin_headers)
        _rsvp(client, event["id"], "u2")

        resp = _check_in(client, event["id"], "u1")
        assert resp.status_code == 403
        assert resp.json() == {"error": "Cannot check in, not RSVP'd.", "code": "NotRSVPed"}

    def test_event_not_started(self, client, admin_headers):
        event = create_test_event(client, admin_headers, start=local_now() + timedelta(hours=3))
        _rsvp(client, event["id"], "u1")

        resp = _check_in(client, event["id"], "u1")
        assert resp.status_code == 400
        assert resp.json()["code"] == "EventNotInSession"

    def test_event_already_over(self, client, admin_headers):
        event = create_test_event(client, admin_headers, start=local_now() - timedelta(hours=5), hours=1)
        _rsvp(client, event["id"], "u1")

        resp = _check_in(client, event["id"], "u1")
        assert resp.status_code == 400
        assert resp.json()["code"] == "EventNotInSession"

    def test_outside_geofence(self, client, db, admin_headers):
        event = create_test_event(client, admin_headers, check_in_radius=200)
        _rsvp(client, event["id"], "u1")

        resp = _check_in(client, event["id"], "u1", point=FAR_AWAY)
        assert resp.status_code == 403
        assert resp.json()["code"] == "OutsideCheckInRadius"
        db.expire_all()
        assert db.query(Event).filter(Event.id == event["id"]).first().event_attending == []

    def test_check_in_does_not_recheck_capacity(self, client, admin_headers):
        event = create_test_event(client, admin_headers, event_limit=1)
        _rsvp(client, event["id"], "u1")
        assert _check_in(client, event["id"], "u1").status_code == 200

    def test_requires_token(self, client, admin_headers):
        event = create_test_event(client, admin_headers)
        resp = client.post(f"/events/checkin/{event['id']}", json={"latitude": 1, "longitude": 1})
        assert resp.status_code == 401

    @pytest.mark.parametrize("body", [
        {"latitude": 91, "longitude": 0},
        {"latitude": 0, "longitude": -181},
        {"latitude": 10, "longitude": 10, "accuracy": -5},
        {"longitude": 10},
    ])
    def test_invalid_payload(self, client, admin_headers, body):
        event = create_test_event(client, admin_headers)
        resp = client.post(f"/events/checkin/{event['id']}", json=body, headers=auth_headers("u1"))
        assert resp.status_code == 422
        assert "error" in resp.json()


def _event(**overrides):
    fields = dict(
        id="e1",
        event_name="Resume Workshop",
        event_date=date(2025, 3, 14),
        event_time=time(9, 0),
        event_hours=1.0,
        event_lat=VENUE[0],
        event_long=VENUE[1],
        check_in_radius=100,
        event_rsvped=["u1"],
        event_attending=[],
    )
    fields.update(overrides)
    return Event(**fields)


class TestValidator:
    """Rule order: session window, duplicate, RSVP, geofence."""

    NOW = TZ.localize(datetime(2025, 3, 14, 9, 15))

    def test_accepts(self):
        validate_check_in(_event(), "u1", *NEARBY, now=self.NOW)

    def test_session_window_checked_first(self):
        late = TZ.localize(datetime(2025, 3, 14, 10, 1))
        with pytest.raises(EventNotInSession):
            validate_check_in(_event(event_rsvped=[]), "u1", *FAR_AWAY, now=late)

    def test_already_checked_in_before_rsvp(self):
        with pytest.raises(AlreadyCheckedIn):
            validate_check_in(_event(event_rsvped=[], event_attending=["u1"]), "u1", *NEARBY, now=self.NOW)

    def test_not_rsvped(self):
        with pytest.raises(NotRSVPed):
            validate_check_in(_event(event_rsvped=["u2"]), "u1", *NEARBY, now=self.NOW)

    def test_geofence(self):
        with pytest.raises(OutsideCheckInRadius):
            validate_check_in(_event(), "u1", *FAR_AWAY, now=self.NOW)

    def test_no_coordinates_skips_geofence(self):
        event = _event(event_lat=None, event_long=None)
        assert distance_to_event_m(event, *FAR_AWAY) is None
        validate_check_in(event, "u1", *FAR_AWAY, now=self.NOW)

    def test_distance(self):
        assert distance_to_event_m(_event(), *NEARBY) < 20
        assert distance_to_event_m(_event(), *FAR_AWAY) > 2500


class TestRecorder:

    def test_idempotent(self):
        event = _event(event_attending=["u2"])
        assert record_attendance(event, "u1") is True
        assert record_attendance(event, "u1") is False
        assert event.event_attending == ["u2", "u1"]


class TestCheckInEdgeCases:

    def test_member_check_in_hidden_event(self, client, db, admin_headers):
        event = create_test_event(client, admin_headers)
        _rsvp(client, event["id"], "u1")
        client.patch(f"/events/{event['id']}", json={"is_hidden": True}, headers=admin_headers)

        resp = _check_in(client, event["id"], "u1")
        assert resp.status_code == 404
        db.expire_all()
        assert db.query(Event).filter(Event.id == event["id"]).first().event_attending == []

    def test_admin_check_in_hidden_event(self, client, admin_headers):
        event = create_test_event(client, admin_headers, is_hidden=True)
        client.post(f"/events/rsvp/{event['id']}", headers=admin_headers)
        resp = client.post(
            f"/events/checkin/{event['id']}",
            json={"latitude": NEARBY[0], "longitude": NEARBY[1], "accuracy": 10},
            headers=admin_headers,
        )
        assert resp.status_code == 200

    def test_stored_out_of_range_duration_is_not_in_session(self, client, db):
        start = local_now() - timedelta(minutes=30)
        db.add(Event(
            id="e-huge",
            event_name="Year-long Drive",
            event_date=start.date(),
            event_time=start.time().replace(microsecond=0, tzinfo=None),
            event_hours=1e12,
            event_lat=VENUE[0],
            event_long=VENUE[1],
            check_in_radius=100,
            event_rsvped=["u1"],
            event_attending=[],
        ))
        db.commit()

        resp = _check_in(client, "e-huge", "u1")
        assert resp.status_code == 400
        assert resp.json()["code"] == "EventNotInSession"
