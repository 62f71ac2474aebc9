"""Tests for front-desk reservation transitions."""

from __future__ import annotations

from datetime import date

import pytest

from apps.properties.models import Room
from apps.properties.tests.factories import (
    create_guest,
    create_property,
    create_rate_plan,
    create_reservation,
    create_room_type,
    create_rooms,
)
from apps.reservations.application.command_handlers import (
    CancelReservationCommand,
    CancelReservationHandler,
    CheckInReservationCommand,
    CheckInReservationHandler,
    CheckOutReservationCommand,
    CheckOutReservationHandler,
    MarkNoShowCommand,
    MarkNoShowHandler,
)
from apps.reservations.domain.entities import ReservationStateError
from apps.reservations.domain.inventory import InventoryLedger
from apps.reservations.models import Reservation

pytestmark = pytest.mark.django_db

ARRIVAL = date(2024, 6, 10)
DEPARTURE = date(2024, 6, 12)


@pytest.fixture
def stay():
    property_obj = create_property()
    room_type = create_room_type(property_obj)
    rooms = create_rooms(room_type, 2)
    reservation = create_reservation(
        room_type, create_guest(), create_rate_plan(property_obj), ARRIVAL, DEPARTURE
    )
    return reservation, rooms


def test_check_in_assigns_room(stay):
    reservation, rooms = stay

    result = CheckInReservationHandler().handle(
        CheckInReservationCommand(reservation_id=reservation.pk, room_id=rooms[0].pk)
    )

    assert result.status == Reservation.Status.CHECKED_IN
    assert result.room == rooms[0]
    assert result.check_in_time is not None
    rooms[0].refresh_from_db()
    assert rooms[0].status == Room.Status.OCCUPIED


def test_check_in_rejects_room_of_other_type(stay):
    reservation, _ = stay
    suite = create_room_type(reservation.property, "Suite")
    suite_room = create_rooms(suite, 1, start_number=301)[0]

    with pytest.raises(ReservationStateError):
        CheckInReservationHandler().handle(
            CheckInReservationCommand(reservation_id=reservation.pk, room_id=suite_room.pk)
        )


def test_check_in_rejects_occupied_room(stay):
    reservation, rooms = stay
    create_reservation(
        reservation.room_type,
        reservation.guest,
        reservation.rate_plan,
        ARRIVAL,
        DEPARTURE,
        status=Reservation.Status.CHECKED_IN,
        room=rooms[0],
    )

    with pytest.raises(ReservationStateError):
        CheckInReservationHandler().handle(
            CheckInReservationCommand(reservation_id=reservation.pk, room_id=rooms[0].pk)
        )

    reservation.refresh_from_db()
    assert reservation.status == Reservation.Status.CONFIRMED


def test_check_out_marks_room_dirty(stay):
    reservation, rooms = stay
    CheckInReservationHandler().handle(
        CheckInReservationCommand(reservation_id=reservation.pk, room_id=rooms[1].pk)
    )

    result = CheckOutReservationHandler().handle(CheckOutReservationCommand(reservation_id=reservation.pk))

    assert result.status == Reservation.Status.CHECKED_OUT
    assert result.check_out_time is not None
    rooms[1].refresh_from_db()
    assert rooms[1].status == Room.Status.DIRTY


def test_check_out_requires_check_in(stay):
    reservation, _ = stay

    with pytest.raises(ReservationStateError):
        CheckOutReservationHandler().handle(CheckOutReservationCommand(reservation_id=reservation.pk))


def test_cancel_releases_inventory(stay):
    reservation, _ = stay
    ledger = InventoryLedger()
    assert ledger.occupancy_for_night(reservation.property_id, reservation.room_type_id, ARRIVAL) == 1

    result = CancelReservationHandler().handle(
        CancelReservationCommand(reservation_id=reservation.pk, reason="Flight cancelled")
    )

    assert result.status == Reservation.Status.CANCELLED
    assert "Flight cancelled" in result.notes
    assert ledger.occupancy_for_night(reservation.property_id, reservation.room_type_id, ARRIVAL) == 0


def test_cancelled_reservation_is_terminal(stay):
    reservation, rooms = stay
    CancelReservationHandler().handle(CancelReservationCommand(reservation_id=reservation.pk))

    with pytest.raises(ReservationStateError):
        CheckInReservationHandler().handle(
            CheckInReservationCommand(reservation_id=reservation.pk, room_id=rooms[0].pk)
        )
    with pytest.raises(ReservationStateError):
        MarkNoShowHandler().handle(MarkNoShowCommand(reservation_id=reservation.pk))


def test_no_show_only_from_confirmed(stay):
    reservation, rooms = stay

    result = MarkNoShowHandler().handle(MarkNoShowCommand(reservation_id=reservation.pk))

    assert result.status == Reservation.Status.NO_SHOW
    with pytest.raises(ReservationStateError):
        CancelReservationHandler().handle(CancelReservationCommand(reservation_id=reservation.pk))


def test_pending_reservation_can_be_cancelled(stay):
    reservation, _ = stay
    Reservation.objects.filter(pk=reservation.pk).update(status=Reservation.Status.PENDING)

    result = CancelReservationHandler().handle(CancelReservationCommand(reservation_id=reservation.pk))

    assert result.status == Reservation.Status.CANCELLED


def test_unknown_reservation_raises_does_not_exist():
    with pytest.raises(Reservation.DoesNotExist):
        CheckOutReservationHandler().handle(CheckOutReservationCommand(reservation_id=999999))
