"""Tests for best available rate selection."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import TestCase

from apps.properties.tests.factories import (
    create_property,
    create_rate_plan,
    create_room_type,
    load_rates,
)
from apps.rates.services import RateSelector

ARRIVAL = date(2024, 6, 10)
DEPARTURE = date(2024, 6, 13)


class RateSelectorTests(TestCase):
    def setUp(self) -> None:
        self.property = create_property()
        self.room_type = create_room_type(self.property)
        self.selector = RateSelector()

    def _best(self, **kwargs):
        return self.selector.best_rate(
            self.property.pk, self.room_type.pk, ARRIVAL, DEPARTURE, 3, **kwargs
        )

    def test_lowest_total_wins(self) -> None:
        bar = create_rate_plan(self.property, "BAR")
        promo = create_rate_plan(self.property, "Promo")
        load_rates(self.room_type, bar, ARRIVAL, 3, "100.00")
        load_rates(self.room_type, promo, ARRIVAL, 3, "90.00")

        quote = self._best()

        assert quote is not None
        self.assertEqual(quote.rate_plan, promo)
        self.assertEqual(quote.total_amount.amount, Decimal("270.00"))
        self.assertEqual(quote.average_nightly_rate.amount, Decimal("90.00"))
        self.assertEqual(quote.nights, 3)
        self.assertEqual(quote.total_amount.currency, "USD")

    def test_plan_with_missing_night_is_skipped(self) -> None:
        cheap = create_rate_plan(self.property, "Cheap")
        full = create_rate_plan(self.property, "Full")
        load_rates(self.room_type, cheap, ARRIVAL, 2, "10.00")
        load_rates(self.room_type, full, ARRIVAL, 3, "100.00")

        quote = self._best()

        assert quote is not None
        self.assertEqual(quote.rate_plan, full)

    def test_plan_with_stop_sell_night_is_skipped(self) -> None:
        plan = create_rate_plan(self.property)
        rows = load_rates(self.room_type, plan, ARRIVAL, 3, "100.00")
        rows[1].stop_sell = True
        rows[1].save()

        self.assertIsNone(self._best())

    def test_length_of_stay_bounds_filter_plans(self) -> None:
        weekly = create_rate_plan(self.property, "Weekly", min_length_of_stay=7)
        short = create_rate_plan(self.property, "Short", max_length_of_stay=2)
        load_rates(self.room_type, weekly, ARRIVAL, 3, "50.00")
        load_rates(self.room_type, short, ARRIVAL, 3, "60.00")

        self.assertIsNone(self._best())

    def test_inactive_plan_is_ignored(self) -> None:
        plan = create_rate_plan(self.property, is_active=False)
        load_rates(self.room_type, plan, ARRIVAL, 3, "100.00")

        self.assertIsNone(self._best())

    def test_tie_keeps_lower_plan_id(self) -> None:
        first = create_rate_plan(self.property, "First")
        second = create_rate_plan(self.property, "Second")
        load_rates(self.room_type, second, ARRIVAL, 3, "80.00")
        load_rates(self.room_type, first, ARRIVAL, 3, "80.00")

        quote = self._best()

        assert quote is not None
        self.assertEqual(quote.rate_plan, first)

    def test_explicit_plan_restricts_candidates(self) -> None:
        bar = create_rate_plan(self.property, "BAR")
        promo = create_rate_plan(self.property, "Promo")
        load_rates(self.room_type, bar, ARRIVAL, 3, "100.00")
        load_rates(self.room_type, promo, ARRIVAL, 3, "90.00")

        quote = self._best(rate_plan_id=bar.pk)

        assert quote is not None
        self.assertEqual(quote.rate_plan, bar)
        self.assertEqual(quote.total_amount.amount, Decimal("300.00"))

    def test_rates_of_other_room_types_are_not_used(self) -> None:
        other = create_room_type(self.property, "Suite")
        plan = create_rate_plan(self.property)
        load_rates(other, plan, ARRIVAL, 3, "100.00")

        self.assertIsNone(self._best())

    def test_quote_uses_property_currency(self) -> None:
        property_obj = create_property(name="Euro Inn", currency="EUR")
        room_type = create_room_type(property_obj)
        plan = create_rate_plan(property_obj)
        load_rates(room_type, plan, ARRIVAL, 3, "70.00")

        quote = self.selector.best_rate(property_obj.pk, room_type.pk, ARRIVAL, DEPARTURE, 3)

        assert quote is not None
        self.assertEqual(quote.total_amount.currency, "EUR")
        self.assertEqual(quote.to_dict()["total_amount"], "210.00")
