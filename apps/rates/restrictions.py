"""Selling restrictions for a room type over a stay.

Restrictions live on daily rate rows but describe the room type and date,
not the plan: if any plan's row for a date is flagged, the date is blocked.
Each restriction type looks at a different slice of the stay:

- stop_sell: every stayed night, arrival inclusive, departure exclusive
- close_to_arrival: the arrival date only
- close_to_departure: the departure date only

All three are blocking. There is no override path.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from shared.domain.value_objects import DateRange

from .models import DailyRate


class RestrictionType(str, Enum):
    STOP_SELL = "stop_sell"
    CLOSE_TO_ARRIVAL = "close_to_arrival"
    CLOSE_TO_DEPARTURE = "close_to_departure"


@dataclass(frozen=True)
class Restriction:
    type: RestrictionType
    date: date

    def to_dict(self) -> dict:
        return {"type": self.type.value, "date": self.date.isoformat()}


class RestrictionEvaluator:
    """Reads restriction flags from daily rate rows at decision time."""

    def restrictions_for(self, property_id, room_type_id, arrival, departure) -> list[Restriction]:
        stay = DateRange.between(arrival, departure)
        rows = DailyRate.objects.filter(property_id=property_id, room_type_id=room_type_id)

        stop_sell_dates = (
            rows.filter(
                stop_sell=True,
                date__gte=stay.start_date,
                date__lt=stay.end_date,
            )
            .values_list("date", flat=True)
            .distinct()
        )
        restrictions = [
            Restriction(RestrictionType.STOP_SELL, night) for night in sorted(set(stop_sell_dates))
        ]

        if rows.filter(date=stay.start_date, close_to_arrival=True).exists():
            restrictions.append(Restriction(RestrictionType.CLOSE_TO_ARRIVAL, stay.start_date))

        if rows.filter(date=stay.end_date, close_to_departure=True).exists():
            restrictions.append(Restriction(RestrictionType.CLOSE_TO_DEPARTURE, stay.end_date))

        restrictions.sort(key=lambda restriction: restriction.date)
        return restrictions

    def flags_for_date(self, property_id, room_type_id, night: date) -> dict[str, bool]:
        """Raw restriction flags on a single date, for calendar display."""
        rows = DailyRate.objects.filter(
            property_id=property_id,
            room_type_id=room_type_id,
            date=night,
        )
        return {
            RestrictionType.STOP_SELL.value: rows.filter(stop_sell=True).exists(),
            RestrictionType.CLOSE_TO_ARRIVAL.value: rows.filter(close_to_arrival=True).exists(),
            RestrictionType.CLOSE_TO_DEPARTURE.value: rows.filter(close_to_departure=True).exists(),
        }
