"""
Reservation Command Handlers

These are the use cases for the reservation domain.
They orchestrate domain operations within transactions.

Commands:
- AdmitReservationCommand: Decide and store a reservation request
- CheckInReservationCommand: Assign a room and check the guest in
- CheckOutReservationCommand: Check the guest out
- CancelReservationCommand: Cancel a reservation
- MarkNoShowCommand: Record that the guest never arrived
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
import logging

from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import as_calendar_date
from apps.guests.models import Guest
from apps.properties.models import Room
from apps.rates.models import RatePlan
from apps.rates.services import RateSelector
from apps.reservations.domain.entities import (
    AdmissionReason,
    AdmissionResult,
    ReservationStateError,
    ensure_transition,
)
from apps.reservations.domain.events import (
    ReservationCancelled,
    ReservationCheckedIn,
    ReservationCheckedOut,
    ReservationConfirmed,
    ReservationMarkedNoShow,
)
from apps.reservations.models import Reservation
from apps.reservations.services import (
    AvailabilityService,
    lock_queryset_if_possible,
    lock_room_type,
)

logger = logging.getLogger(__name__)

NO_RATES_MESSAGE = "No available rates found"
NO_ROOMS_MESSAGE = "No rooms available for the selected dates"
RESTRICTED_MESSAGE = "Selected dates have booking restrictions"


# ===== Commands =====

@dataclass
class AdmitReservationCommand:
    """
    Command to admit a reservation request

    When total_amount is given the rate selector is skipped and the
    amount is stored as-is; a rate_plan_id must then be given too.
    """
    property_id: int
    guest_id: int
    room_type_id: int
    arrival_date: date
    departure_date: date
    rate_plan_id: int | None = None
    adults: int = 1
    children: int = 0
    total_amount: Decimal | None = None
    special_requests: str = ''
    source: str = 'direct'
    notes: str = ''
    created_by: object = None
    validate_availability: bool = True


@dataclass
class CheckInReservationCommand:
    """Command to check in a guest into a specific room"""
    reservation_id: int
    room_id: int


@dataclass
class CheckOutReservationCommand:
    reservation_id: int


@dataclass
class CancelReservationCommand:
    reservation_id: int
    reason: str = ''


@dataclass
class MarkNoShowCommand:
    reservation_id: int


# ===== Command Handlers =====

class AdmitReservationHandler:
    """
    Handler for AdmitReservation command

    Strategy:
    1. Compute nights; an empty or inverted stay is a validation error
    2. Start database transaction (atomic)
    3. Lock the room type row (SELECT FOR UPDATE); concurrent admissions
       for the same room type wait here
    4. Check the rate plan's length-of-stay bounds
    5. Price the stay with the rate selector
    6. Re-check availability and restrictions under the lock
    7. Insert the reservation and record ReservationConfirmed
    8. Commit transaction, then publish events

    Rejections return an AdmissionResult and never write a row.
    DatabaseError is not caught here: the transaction rolls back and the
    error reaches the caller.
    """

    def __init__(self, availability_service: AvailabilityService | None = None, rate_selector: RateSelector | None = None):
        self.availability_service = availability_service or AvailabilityService()
        self.rate_selector = rate_selector or RateSelector()

    def __call__(self, command: AdmitReservationCommand) -> AdmissionResult:
        return self.handle(command)

    def handle(self, command: AdmitReservationCommand) -> AdmissionResult:
        arrival = as_calendar_date(command.arrival_date)
        departure = as_calendar_date(command.departure_date)
        nights = (departure - arrival).days

        logger.info(
            f"Admitting reservation for property {command.property_id}, "
            f"room type {command.room_type_id}, stay {arrival} - {departure}"
        )

        if nights <= 0:
            return self._reject(command, AdmissionReason.VALIDATION, "Invalid date range")

        with DjangoUnitOfWork() as uow:
            room_type = lock_room_type(command.property_id, command.room_type_id)
            if room_type is None:
                return self._reject(
                    command, AdmissionReason.VALIDATION, "Room type not found for this property"
                )

            if not Guest.objects.filter(pk=command.guest_id).exists():
                return self._reject(command, AdmissionReason.VALIDATION, "Guest not found")

            rate_plan = None
            if command.rate_plan_id is not None:
                rate_plan = RatePlan.objects.filter(
                    pk=command.rate_plan_id,
                    property_id=command.property_id,
                ).first()
                if rate_plan is None:
                    return self._reject(
                        command, AdmissionReason.VALIDATION, "Rate plan not found for this property"
                    )

                violation = rate_plan.length_of_stay_violation(nights)
                if violation:
                    return self._reject(command, AdmissionReason.VALIDATION, violation)

            if command.total_amount is not None:
                if rate_plan is None:
                    return self._reject(
                        command,
                        AdmissionReason.VALIDATION,
                        "A rate plan is required when a total amount is given",
                    )
                total_amount = Decimal(str(command.total_amount))
            else:
                quote = self.rate_selector.best_rate(
                    command.property_id,
                    command.room_type_id,
                    arrival,
                    departure,
                    nights,
                    rate_plan_id=command.rate_plan_id,
                )
                if quote is None:
                    return self._reject(command, AdmissionReason.NO_RATES, NO_RATES_MESSAGE)
                rate_plan = quote.rate_plan
                total_amount = quote.total_amount.amount

            availability = None
            if command.validate_availability:
                availability = self.availability_service.check_availability(
                    command.property_id, command.room_type_id, arrival, departure
                )
                if availability.available_rooms <= 0:
                    return self._reject(
                        command, AdmissionReason.NO_ROOMS_AVAILABLE, NO_ROOMS_MESSAGE, availability
                    )
                if availability.restrictions:
                    return self._reject(
                        command, AdmissionReason.RESTRICTED, RESTRICTED_MESSAGE, availability
                    )

            reservation = Reservation.objects.create(
                property_id=command.property_id,
                guest_id=command.guest_id,
                room_type=room_type,
                rate_plan=rate_plan,
                arrival_date=arrival,
                departure_date=departure,
                nights=nights,
                adults=command.adults,
                children=command.children,
                total_amount=total_amount,
                status=Reservation.Status.CONFIRMED,
                source=command.source or 'direct',
                special_requests=command.special_requests,
                notes=command.notes,
                created_by=command.created_by,
            )

            uow.record(ReservationConfirmed(
                aggregate_id=reservation.pk,
                confirmation_number=reservation.confirmation_number,
                property_id=command.property_id,
                room_type_id=command.room_type_id,
                arrival_date=arrival,
                departure_date=departure,
                total_amount=reservation.total_amount,
            ))

        logger.info(
            f"Reservation admitted: {reservation.confirmation_number} "
            f"({nights} nights, total {reservation.total_amount})"
        )
        return AdmissionResult.admitted(reservation, availability)

    def _reject(self, command, reason: AdmissionReason, error: str, availability=None) -> AdmissionResult:
        logger.info(
            f"Reservation rejected ({reason.value}) for property {command.property_id}, "
            f"room type {command.room_type_id}: {error}"
        )
        return AdmissionResult.rejected(reason, error, availability)


def _load_for_update(reservation_id) -> Reservation:
    """Raises Reservation.DoesNotExist for unknown ids"""
    queryset = Reservation.objects.filter(pk=reservation_id)
    return lock_queryset_if_possible(queryset).get()


class CheckInReservationHandler:
    """Handler for checking in a guest"""

    UNSELLABLE_ROOM_STATUSES = (Room.Status.OUT_OF_ORDER, Room.Status.MAINTENANCE)

    def __call__(self, command: CheckInReservationCommand) -> Reservation:
        return self.handle(command)

    def handle(self, command: CheckInReservationCommand) -> Reservation:
        logger.info(f"Checking in reservation {command.reservation_id} to room {command.room_id}")

        with DjangoUnitOfWork() as uow:
            reservation = _load_for_update(command.reservation_id)
            ensure_transition(reservation, Reservation.Status.CHECKED_IN)

            room = lock_queryset_if_possible(
                Room.objects.filter(
                    pk=command.room_id,
                    property_id=reservation.property_id,
                    room_type_id=reservation.room_type_id,
                    is_active=True,
                )
            ).first()
            if room is None:
                raise ReservationStateError(
                    f"Room {command.room_id} is not an active room of the reserved room type"
                )
            if room.status in self.UNSELLABLE_ROOM_STATUSES:
                raise ReservationStateError(f"Room {room.room_number} is {room.get_status_display()}")

            held = Reservation.objects.filter(
                room=room,
                status=Reservation.Status.CHECKED_IN,
            ).exclude(pk=reservation.pk)
            if held.exists():
                raise ReservationStateError(f"Room {room.room_number} is already occupied")

            reservation.room = room
            reservation.status = Reservation.Status.CHECKED_IN
            reservation.check_in_time = timezone.now()
            reservation.save(update_fields=["room", "status", "check_in_time", "updated_at"])

            room.status = Room.Status.OCCUPIED
            room.save(update_fields=["status", "updated_at"])

            uow.record(ReservationCheckedIn(aggregate_id=reservation.pk, room_id=room.pk))

        logger.info(f"Reservation {reservation.confirmation_number} checked in to room {room.room_number}")
        return reservation


class CheckOutReservationHandler:
    """Handler for checking out a guest; the room goes to housekeeping"""

    def __call__(self, command: CheckOutReservationCommand) -> Reservation:
        return self.handle(command)

    def handle(self, command: CheckOutReservationCommand) -> Reservation:
        logger.info(f"Checking out reservation {command.reservation_id}")

        with DjangoUnitOfWork() as uow:
            reservation = _load_for_update(command.reservation_id)
            ensure_transition(reservation, Reservation.Status.CHECKED_OUT)

            reservation.status = Reservation.Status.CHECKED_OUT
            reservation.check_out_time = timezone.now()
            reservation.save(update_fields=["status", "check_out_time", "updated_at"])

            room = reservation.room
            if room is not None:
                room.status = Room.Status.DIRTY
                room.save(update_fields=["status", "updated_at"])

            uow.record(ReservationCheckedOut(
                aggregate_id=reservation.pk,
                room_id=room.pk if room else None,
            ))

        logger.info(f"Reservation {reservation.confirmation_number} checked out")
        return reservation


class CancelReservationHandler:
    """Handler for cancelling a reservation; its nights become sellable again"""

    def __call__(self, command: CancelReservationCommand) -> Reservation:
        return self.handle(command)

    def handle(self, command: CancelReservationCommand) -> Reservation:
        logger.info(f"Cancelling reservation {command.reservation_id}, reason: {command.reason}")

        with DjangoUnitOfWork() as uow:
            reservation = _load_for_update(command.reservation_id)
            ensure_transition(reservation, Reservation.Status.CANCELLED)

            reservation.status = Reservation.Status.CANCELLED
            if command.reason:
                line = f"Cancelled: {command.reason}"
                reservation.notes = f"{reservation.notes}\n{line}" if reservation.notes else line
            reservation.save(update_fields=["status", "notes", "updated_at"])

            uow.record(ReservationCancelled(aggregate_id=reservation.pk, reason=command.reason))

        logger.info(f"Reservation {reservation.confirmation_number} cancelled")
        return reservation


class MarkNoShowHandler:
    """Handler for marking a confirmed reservation as a no-show"""

    def __call__(self, command: MarkNoShowCommand) -> Reservation:
        return self.handle(command)

    def handle(self, command: MarkNoShowCommand) -> Reservation:
        with DjangoUnitOfWork() as uow:
            reservation = _load_for_update(command.reservation_id)
            ensure_transition(reservation, Reservation.Status.NO_SHOW)

            reservation.status = Reservation.Status.NO_SHOW
            reservation.save(update_fields=["status", "updated_at"])

            uow.record(ReservationMarkedNoShow(
                aggregate_id=reservation.pk,
                arrival_date=reservation.arrival_date,
            ))

        logger.info(f"Reservation {reservation.confirmation_number} marked as no-show")
        return reservation
