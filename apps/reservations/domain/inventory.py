"""
Inventory Ledger

Room inventory for a (property, room type) pair, derived from live rows
every time it is asked. Nothing here caches a counter: reservation status
changes made anywhere else are visible on the next read.

Rules:
- Only active rooms count toward the total.
- A reservation occupies night D iff arrival_date <= D < departure_date and
  its status is confirmed or checked_in. A departure on day X and an
  arrival on day X do not conflict.
- A stay is bounded by its worst night: the availability of a multi-night
  stay is the minimum over every stayed night, never an average and never
  just the first night.
"""

from datetime import date
import logging

from apps.properties.models import Room
from apps.reservations.models import Reservation
from shared.domain.value_objects import DateRange

logger = logging.getLogger(__name__)


class InventoryLedger:
    """Per-night occupancy and capacity for one room type pool"""

    def total_active_rooms(self, property_id, room_type_id) -> int:
        return Room.objects.filter(
            property_id=property_id,
            room_type_id=room_type_id,
            is_active=True,
        ).count()

    def occupancy_for_night(self, property_id, room_type_id, night: date) -> int:
        return (
            Reservation.objects.for_room_type(property_id, room_type_id)
            .consuming_inventory()
            .occupying_night(night)
            .count()
        )

    def available_on_night(self, property_id, room_type_id, night: date, total_rooms: int | None = None) -> int:
        if total_rooms is None:
            total_rooms = self.total_active_rooms(property_id, room_type_id)
        return total_rooms - self.occupancy_for_night(property_id, room_type_id, night)

    def minimum_available(self, property_id, room_type_id, arrival, departure, total_rooms: int | None = None) -> int:
        """
        Rooms free on every night of the stay

        Walks the stay night by night from arrival (inclusive) to departure
        (exclusive), keeping a running minimum. One sold-out night blocks
        the whole stay.
        """
        stay = DateRange.between(arrival, departure)
        if total_rooms is None:
            total_rooms = self.total_active_rooms(property_id, room_type_id)

        minimum = total_rooms
        for night in stay.iter_nights():
            available = self.available_on_night(property_id, room_type_id, night, total_rooms)
            if available < minimum:
                minimum = available
            if available <= 0:
                logger.debug(f"Room type {room_type_id} sold out on {night}")
        return minimum
