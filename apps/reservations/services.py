"""Availability services for the reservation domain."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from django.db import transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.properties.models import RoomType
from apps.rates.restrictions import RestrictionEvaluator, RestrictionType
from shared.domain.value_objects import DateRange, as_calendar_date

from .domain.entities import AvailabilitySnapshot, CalendarDay
from .domain.inventory import InventoryLedger
from .models import Reservation

logger = logging.getLogger(__name__)


def lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def lock_room_type(property_id, room_type_id) -> RoomType | None:
    """
    Take the admission lock for a (property, room type) pair.

    Locks the room type row for the rest of the surrounding transaction, so
    concurrent admissions for the same pool queue up behind each other while
    admissions for other room types proceed. Returns None when the room
    type does not exist or belongs to another property.
    """

    queryset = RoomType.objects.filter(pk=room_type_id, property_id=property_id)
    return lock_queryset_if_possible(queryset).first()


class AvailabilityService:
    """
    Composes the inventory ledger and the restriction evaluator.

    Results computed outside a transaction are advisory: only a check made
    inside the admission transaction may justify an insert.
    """

    def __init__(self, ledger: InventoryLedger | None = None, evaluator: RestrictionEvaluator | None = None):
        self.ledger = ledger or InventoryLedger()
        self.evaluator = evaluator or RestrictionEvaluator()

    def check_availability(self, property_id, room_type_id, arrival, departure) -> AvailabilitySnapshot:
        stay = DateRange.between(arrival, departure)
        total_rooms = self.ledger.total_active_rooms(property_id, room_type_id)
        available_rooms = self.ledger.minimum_available(
            property_id, room_type_id, stay.start_date, stay.end_date, total_rooms
        )
        restrictions = self.evaluator.restrictions_for(
            property_id, room_type_id, stay.start_date, stay.end_date
        )

        snapshot = AvailabilitySnapshot(
            total_rooms=total_rooms,
            available_rooms=available_rooms,
            restrictions=tuple(restrictions),
        )
        logger.debug(
            f"Availability for room type {room_type_id} {stay}: "
            f"{available_rooms}/{total_rooms} free, {len(restrictions)} restriction(s)"
        )
        return snapshot

    def availability_calendar(self, property_id, room_type_id, from_date, to_date) -> list[CalendarDay]:
        """One record per date from from_date through to_date, both inclusive."""

        current: date = as_calendar_date(from_date)
        end: date = as_calendar_date(to_date)
        total_rooms = self.ledger.total_active_rooms(property_id, room_type_id)

        days = []
        while current <= end:
            flags = self.evaluator.flags_for_date(property_id, room_type_id, current)
            days.append(
                CalendarDay(
                    date=current,
                    total_rooms=total_rooms,
                    occupied_rooms=self.ledger.occupancy_for_night(property_id, room_type_id, current),
                    stop_sell=flags[RestrictionType.STOP_SELL.value],
                    close_to_arrival=flags[RestrictionType.CLOSE_TO_ARRIVAL.value],
                    close_to_departure=flags[RestrictionType.CLOSE_TO_DEPARTURE.value],
                )
            )
            current = current + timedelta(days=1)
        return days


def todays_arrivals(property_id, today: date | None = None):
    """Confirmed reservations due to arrive today."""

    today = today or timezone.localdate()
    return (
        Reservation.objects.filter(
            property_id=property_id,
            arrival_date=today,
            status=Reservation.Status.CONFIRMED,
        )
        .select_related("guest", "room_type", "room")
        .order_by("guest__last_name", "id")
    )


def todays_departures(property_id, today: date | None = None):
    """In-house reservations due to leave today."""

    today = today or timezone.localdate()
    return (
        Reservation.objects.filter(
            property_id=property_id,
            departure_date=today,
            status=Reservation.Status.CHECKED_IN,
        )
        .select_related("guest", "room_type", "room")
        .order_by("room__room_number", "id")
    )
