"""Rate services: best available rate and daily rate loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from django.db import transaction  # type: ignore

from apps.properties.models import Property, RoomType
from shared.domain.value_objects import DateRange, Money

from .models import DailyRate, RatePlan

logger = logging.getLogger(__name__)


@dataclass
class RateQuote:
    """The price of a full stay under one rate plan."""

    rate_plan: RatePlan
    daily_rates: list[DailyRate]
    total_amount: Money
    average_nightly_rate: Money
    nights: int = field(default=0)

    def to_dict(self) -> dict:
        return {
            "rate_plan_id": self.rate_plan.pk,
            "rate_plan_name": self.rate_plan.name,
            "nights": self.nights,
            "currency": self.total_amount.currency,
            "total_amount": str(self.total_amount.amount),
            "average_nightly_rate": str(self.average_nightly_rate.amount),
            "daily_rates": [
                {"date": row.date.isoformat(), "rate": str(row.rate)} for row in self.daily_rates
            ],
        }


class RateSelector:
    """
    Best available rate across competing rate plans

    A plan can quote a stay only if it has an unrestricted row for every
    stayed night. Among the plans that can, the lowest total wins; on a tie
    the earlier plan (lower id) is kept.
    """

    def best_rate(
        self,
        property_id,
        room_type_id,
        arrival,
        departure,
        nights: int,
        rate_plan_id=None,
    ) -> RateQuote | None:
        stay = DateRange.between(arrival, departure)
        currency = (
            Property.objects.filter(pk=property_id).values_list("currency", flat=True).first() or "USD"
        )

        candidates = RatePlan.objects.filter(property_id=property_id).active().valid_for_stay(nights)
        if rate_plan_id is not None:
            candidates = candidates.filter(pk=rate_plan_id)

        best: RateQuote | None = None
        for plan in candidates.order_by("id"):
            quote = self._quote(plan, room_type_id, stay, nights, currency)
            if quote is None:
                continue
            if best is None or quote.total_amount < best.total_amount:
                best = quote

        if best is None:
            logger.info(
                f"No available rates for property {property_id}, room type {room_type_id}, "
                f"stay {stay}"
            )
        return best

    def _quote(self, plan: RatePlan, room_type_id, stay: DateRange, nights: int, currency: str) -> RateQuote | None:
        rows = list(
            DailyRate.objects.filter(
                rate_plan=plan,
                room_type_id=room_type_id,
                date__gte=stay.start_date,
                date__lt=stay.end_date,
            ).order_by("date")
        )

        # A gap means the plan cannot quote the full stay
        if len(rows) != nights:
            return None
        if any(row.stop_sell for row in rows):
            return None

        total = Money(sum((row.rate for row in rows), Decimal("0")), currency)
        return RateQuote(
            rate_plan=plan,
            daily_rates=rows,
            total_amount=total,
            average_nightly_rate=(total / nights).rounded(),
            nights=nights,
        )


@transaction.atomic
def upsert_daily_rates(
    room_type: RoomType,
    rate_plan: RatePlan,
    dates: Iterable[date],
    rate: Decimal,
    *,
    stop_sell: bool = False,
    close_to_arrival: bool = False,
    close_to_departure: bool = False,
) -> list[DailyRate]:
    """Create or overwrite one daily rate row per date for the room type and plan."""

    if room_type.property_id != rate_plan.property_id:
        raise ValueError("Room type and rate plan belong to different properties")

    rows = []
    for night in dates:
        row, _ = DailyRate.objects.update_or_create(
            room_type=room_type,
            rate_plan=rate_plan,
            date=night,
            defaults={
                "property_id": room_type.property_id,
                "rate": rate,
                "stop_sell": stop_sell,
                "close_to_arrival": close_to_arrival,
                "close_to_departure": close_to_departure,
            },
        )
        rows.append(row)
    logger.info(f"Upserted {len(rows)} daily rates for plan {rate_plan.pk}, room type {room_type.pk}")
    return rows
