"""
Reservation Domain Entities

Value types returned by availability checks and admission, plus the
reservation status state machine:

- AvailabilitySnapshot: capacity and restrictions for a stay
- CalendarDay: per-date facts for calendar rendering
- AdmissionResult: outcome of an admission attempt
- ReservationStatus transitions
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from apps.rates.restrictions import Restriction
from apps.reservations.models import Reservation


@dataclass(frozen=True)
class AvailabilitySnapshot:
    """
    Sellability of a room type for one stay

    available_rooms is the minimum over the stayed nights; a stay is
    available only if at least one room is free on every night AND no
    restriction applies. Plenty of rooms never override a restriction.
    """
    total_rooms: int
    available_rooms: int
    restrictions: tuple[Restriction, ...] = ()

    @property
    def occupied_rooms(self) -> int:
        return self.total_rooms - self.available_rooms

    @property
    def available(self) -> bool:
        return self.available_rooms > 0 and not self.restrictions

    def to_dict(self) -> dict:
        return {
            'available': self.available,
            'total_rooms': self.total_rooms,
            'occupied_rooms': self.occupied_rooms,
            'available_rooms': self.available_rooms,
            'restrictions': [restriction.to_dict() for restriction in self.restrictions],
        }


@dataclass(frozen=True)
class CalendarDay:
    """One date of a room type calendar: facts only, no decision"""
    date: date
    total_rooms: int
    occupied_rooms: int
    stop_sell: bool = False
    close_to_arrival: bool = False
    close_to_departure: bool = False

    @property
    def available_rooms(self) -> int:
        return self.total_rooms - self.occupied_rooms

    def to_dict(self) -> dict:
        return {
            'date': self.date.isoformat(),
            'total_rooms': self.total_rooms,
            'occupied_rooms': self.occupied_rooms,
            'available_rooms': self.available_rooms,
            'stop_sell': self.stop_sell,
            'close_to_arrival': self.close_to_arrival,
            'close_to_departure': self.close_to_departure,
        }


class AdmissionReason(Enum):
    """
    Why an admission was refused

    Each maps to its own HTTP status, so callers can tell a sold-out stay
    from a restricted one from a bad request.
    """
    VALIDATION = 'validation'
    NO_RATES = 'no_rates'
    NO_ROOMS_AVAILABLE = 'no_rooms_available'
    RESTRICTED = 'restricted'


@dataclass
class AdmissionResult:
    """Outcome of AdmitReservationHandler; rejections carry their context"""
    success: bool
    reservation: Reservation | None = None
    reason: AdmissionReason | None = None
    error: str = ''
    availability: AvailabilitySnapshot | None = None
    restrictions: list[Restriction] = field(default_factory=list)

    @classmethod
    def admitted(cls, reservation: Reservation, availability: AvailabilitySnapshot | None = None):
        return cls(success=True, reservation=reservation, availability=availability)

    @classmethod
    def rejected(cls, reason: AdmissionReason, error: str, availability: AvailabilitySnapshot | None = None):
        restrictions = list(availability.restrictions) if availability else []
        return cls(
            success=False,
            reason=reason,
            error=error,
            availability=availability,
            restrictions=restrictions,
        )


class ReservationStateError(Exception):
    """Raised when a lifecycle transition is not allowed from the current status"""


ReservationStatus = Reservation.Status

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    ReservationStatus.PENDING.value: frozenset({
        ReservationStatus.CONFIRMED.value,
        ReservationStatus.CANCELLED.value,
    }),
    ReservationStatus.CONFIRMED.value: frozenset({
        ReservationStatus.CHECKED_IN.value,
        ReservationStatus.CANCELLED.value,
        ReservationStatus.NO_SHOW.value,
    }),
    ReservationStatus.CHECKED_IN.value: frozenset({ReservationStatus.CHECKED_OUT.value}),
}


def ensure_transition(reservation: Reservation, target: str) -> None:
    """Terminal statuses (checked_out, cancelled, no_show) allow nothing."""
    if str(target) not in ALLOWED_TRANSITIONS.get(str(reservation.status), frozenset()):
        raise ReservationStateError(
            f"Reservation {reservation.confirmation_number} cannot move from "
            f"{reservation.status} to {target}"
        )
