"""Tests for periodic reservation tasks."""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone

from apps.properties.tests.factories import (
    create_guest,
    create_property,
    create_rate_plan,
    create_reservation,
    create_room_type,
)
from apps.reservations.models import Reservation
from apps.reservations.tasks import mark_no_shows

pytestmark = pytest.mark.django_db


def test_mark_no_shows_only_touches_overdue_confirmed():
    property_obj = create_property()
    room_type = create_room_type(property_obj)
    guest = create_guest()
    plan = create_rate_plan(property_obj)
    today = timezone.localdate()

    overdue = create_reservation(room_type, guest, plan, today - timedelta(days=2), today + timedelta(days=1))
    arriving_today = create_reservation(room_type, guest, plan, today, today + timedelta(days=2))
    in_house = create_reservation(
        room_type,
        guest,
        plan,
        today - timedelta(days=1),
        today + timedelta(days=1),
        status=Reservation.Status.CHECKED_IN,
    )

    result = mark_no_shows.delay().get()

    assert result == {"marked": 1}
    overdue.refresh_from_db()
    arriving_today.refresh_from_db()
    in_house.refresh_from_db()
    assert overdue.status == Reservation.Status.NO_SHOW
    assert arriving_today.status == Reservation.Status.CONFIRMED
    assert in_house.status == Reservation.Status.CHECKED_IN


def test_mark_no_shows_with_nothing_due():
    assert mark_no_shows() == {"marked": 0}
