"""Tests for availability snapshots and calendars."""

from __future__ import annotations

from datetime import date

from django.test import TestCase

from apps.properties.tests.factories import (
    create_guest,
    create_property,
    create_rate_plan,
    create_reservation,
    create_room_type,
    create_rooms,
    load_rates,
)
from apps.rates.models import DailyRate
from apps.reservations.services import AvailabilityService


class AvailabilityServiceTests(TestCase):
    def setUp(self) -> None:
        self.property = create_property()
        self.room_type = create_room_type(self.property)
        create_rooms(self.room_type, 3)
        self.plan = create_rate_plan(self.property)
        self.guest = create_guest()
        load_rates(self.room_type, self.plan, date(2024, 6, 1), 30, "100.00")
        self.service = AvailabilityService()

    def _check(self, arrival: date, departure: date):
        return self.service.check_availability(self.property.pk, self.room_type.pk, arrival, departure)

    def test_open_stay_is_available(self) -> None:
        snapshot = self._check(date(2024, 6, 10), date(2024, 6, 12))

        self.assertTrue(snapshot.available)
        self.assertEqual(snapshot.total_rooms, 3)
        self.assertEqual(snapshot.available_rooms, 3)
        self.assertEqual(snapshot.occupied_rooms, 0)
        self.assertEqual(snapshot.restrictions, ())

    def test_stop_sell_blocks_despite_free_rooms(self) -> None:
        DailyRate.objects.filter(date=date(2024, 6, 11)).update(stop_sell=True)

        snapshot = self._check(date(2024, 6, 10), date(2024, 6, 12))

        self.assertFalse(snapshot.available)
        self.assertEqual(snapshot.available_rooms, 3)
        self.assertEqual(
            snapshot.to_dict()["restrictions"],
            [{"type": "stop_sell", "date": "2024-06-11"}],
        )

    def test_single_full_night_blocks_stay(self) -> None:
        for _ in range(3):
            create_reservation(self.room_type, self.guest, self.plan, date(2024, 6, 12), date(2024, 6, 13))

        snapshot = self._check(date(2024, 6, 10), date(2024, 6, 14))

        self.assertFalse(snapshot.available)
        self.assertEqual(snapshot.available_rooms, 0)

    def test_back_to_back_stay_is_available(self) -> None:
        for _ in range(3):
            create_reservation(self.room_type, self.guest, self.plan, date(2024, 6, 8), date(2024, 6, 10))

        snapshot = self._check(date(2024, 6, 10), date(2024, 6, 12))

        self.assertTrue(snapshot.available)

    def test_calendar_includes_both_ends(self) -> None:
        create_reservation(self.room_type, self.guest, self.plan, date(2024, 6, 10), date(2024, 6, 11))
        DailyRate.objects.filter(date=date(2024, 6, 12)).update(close_to_arrival=True)

        days = self.service.availability_calendar(
            self.property.pk, self.room_type.pk, date(2024, 6, 10), date(2024, 6, 12)
        )

        self.assertEqual([day.date for day in days], [date(2024, 6, 10), date(2024, 6, 11), date(2024, 6, 12)])
        self.assertEqual(days[0].occupied_rooms, 1)
        self.assertEqual(days[0].available_rooms, 2)
        self.assertEqual(days[1].occupied_rooms, 0)
        self.assertTrue(days[2].close_to_arrival)
        self.assertFalse(days[2].stop_sell)
