"""Tests for the reservation model."""

from __future__ import annotations

import re
from datetime import date

import pytest
from django.contrib.admin.sites import site
from django.core.exceptions import ValidationError

from apps.properties.tests.factories import (
    create_guest,
    create_property,
    create_rate_plan,
    create_reservation,
    create_room_type,
)
from apps.reservations.admin import ReservationAdmin
from apps.reservations.models import Reservation

pytestmark = pytest.mark.django_db


def test_confirmation_number_format():
    number = Reservation.generate_confirmation_number()

    assert re.fullmatch(r"RES-\d{14}[0-9A-F]{6}", number)


def test_confirmation_number_is_assigned_on_insert():
    property_obj = create_property()
    reservation = create_reservation(
        create_room_type(property_obj),
        create_guest(),
        create_rate_plan(property_obj),
        date(2024, 6, 10),
        date(2024, 6, 12),
    )

    assert reservation.confirmation_number.startswith("RES-")


@pytest.mark.parametrize(
    "status, holds_room",
    [
        (Reservation.Status.CONFIRMED, True),
        (Reservation.Status.CHECKED_IN, True),
        (Reservation.Status.CHECKED_OUT, False),
        (Reservation.Status.CANCELLED, False),
        (Reservation.Status.NO_SHOW, False),
        (Reservation.Status.PENDING, False),
    ],
)
def test_consumes_inventory_by_status(status, holds_room):
    assert Reservation(status=status).consumes_inventory() is holds_room


def test_admin_shows_whether_reservation_holds_a_room():
    model_admin = ReservationAdmin(Reservation, site)

    assert model_admin.holds_room(Reservation(status=Reservation.Status.CONFIRMED)) is True
    assert model_admin.holds_room(Reservation(status=Reservation.Status.CANCELLED)) is False


def test_clean_rejects_departure_before_arrival():
    reservation = Reservation(arrival_date=date(2024, 6, 12), departure_date=date(2024, 6, 12))

    with pytest.raises(ValidationError):
        reservation.clean()
