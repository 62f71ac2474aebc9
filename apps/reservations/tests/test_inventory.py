"""Tests for live inventory counting."""

from __future__ import annotations

from datetime import date

import pytest

from apps.properties.tests.factories import (
    create_guest,
    create_property,
    create_rate_plan,
    create_reservation,
    create_room_type,
    create_rooms,
)
from apps.reservations.domain.inventory import InventoryLedger
from apps.reservations.models import Reservation

pytestmark = pytest.mark.django_db


@pytest.fixture
def pool():
    property_obj = create_property()
    room_type = create_room_type(property_obj)
    create_rooms(room_type, 2)
    return property_obj, room_type, create_guest(), create_rate_plan(property_obj)


def test_only_active_rooms_count(pool):
    property_obj, room_type, _, _ = pool
    create_rooms(room_type, 1, start_number=201, is_active=False)

    assert InventoryLedger().total_active_rooms(property_obj.pk, room_type.pk) == 2


def test_departure_night_is_not_occupied(pool):
    property_obj, room_type, guest, plan = pool
    create_reservation(room_type, guest, plan, date(2024, 6, 10), date(2024, 6, 12))
    ledger = InventoryLedger()

    assert ledger.occupancy_for_night(property_obj.pk, room_type.pk, date(2024, 6, 10)) == 1
    assert ledger.occupancy_for_night(property_obj.pk, room_type.pk, date(2024, 6, 11)) == 1
    assert ledger.occupancy_for_night(property_obj.pk, room_type.pk, date(2024, 6, 12)) == 0


def test_only_confirmed_and_checked_in_consume_inventory(pool):
    property_obj, room_type, guest, plan = pool
    night = date(2024, 6, 10)
    for status in Reservation.Status.values:
        create_reservation(room_type, guest, plan, night, date(2024, 6, 11), status=status)

    assert InventoryLedger().occupancy_for_night(property_obj.pk, room_type.pk, night) == 2


def test_minimum_across_nights_is_bounded_by_worst_night(pool):
    property_obj, room_type, guest, plan = pool
    # Night of the 12th is full, the others have a room left
    create_reservation(room_type, guest, plan, date(2024, 6, 11), date(2024, 6, 13))
    create_reservation(room_type, guest, plan, date(2024, 6, 12), date(2024, 6, 13))

    ledger = InventoryLedger()

    assert ledger.minimum_available(property_obj.pk, room_type.pk, date(2024, 6, 10), date(2024, 6, 14)) == 0


def test_minimum_available_for_open_stay(pool):
    property_obj, room_type, guest, plan = pool
    create_reservation(room_type, guest, plan, date(2024, 6, 11), date(2024, 6, 12))

    ledger = InventoryLedger()

    assert ledger.minimum_available(property_obj.pk, room_type.pk, date(2024, 6, 10), date(2024, 6, 13)) == 1


def test_other_room_types_do_not_share_inventory(pool):
    property_obj, room_type, guest, plan = pool
    suite = create_room_type(property_obj, "Suite")
    create_rooms(suite, 1, start_number=301)
    create_reservation(suite, guest, plan, date(2024, 6, 10), date(2024, 6, 11))

    assert InventoryLedger().occupancy_for_night(property_obj.pk, room_type.pk, date(2024, 6, 10)) == 0
