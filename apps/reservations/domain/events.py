"""
Reservation Domain Events

Recorded inside the unit of work and published after commit.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from shared.domain.base import DomainEvent


@dataclass
class ReservationConfirmed(DomainEvent):
    """A reservation request was admitted and stored as confirmed"""
    confirmation_number: str = ''
    property_id: int | None = None
    room_type_id: int | None = None
    arrival_date: date | None = None
    departure_date: date | None = None
    total_amount: Decimal = Decimal('0')


@dataclass
class ReservationCheckedIn(DomainEvent):
    """Guest arrived and a room was assigned (confirmed -> checked_in)"""
    room_id: int | None = None


@dataclass
class ReservationCheckedOut(DomainEvent):
    """Guest left; the room needs housekeeping (checked_in -> checked_out)"""
    room_id: int | None = None


@dataclass
class ReservationCancelled(DomainEvent):
    """Reservation cancelled; its nights are released"""
    reason: str = ''


@dataclass
class ReservationMarkedNoShow(DomainEvent):
    """Guest never arrived; its nights are released"""
    arrival_date: date | None = None
