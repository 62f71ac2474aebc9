"""Concurrent admissions for the last room."""

from __future__ import annotations

import threading
from datetime import date

from django.db import connection
from django.test import TransactionTestCase

from apps.properties.tests.factories import (
    create_guest,
    create_property,
    create_rate_plan,
    create_room_type,
    create_rooms,
    load_rates,
)
from apps.reservations.application.command_handlers import (
    AdmitReservationCommand,
    AdmitReservationHandler,
)
from apps.reservations.domain.entities import AdmissionReason
from apps.reservations.models import Reservation


class ConcurrentAdmissionTests(TransactionTestCase):
    workers = 5

    def setUp(self) -> None:
        self.property = create_property()
        self.room_type = create_room_type(self.property)
        create_rooms(self.room_type, 1)
        plan = create_rate_plan(self.property)
        load_rates(self.room_type, plan, date(2024, 6, 10), 2, "100.00")
        self.guest = create_guest()

    def _admit(self, barrier: threading.Barrier, results: list) -> None:
        command = AdmitReservationCommand(
            property_id=self.property.pk,
            guest_id=self.guest.pk,
            room_type_id=self.room_type.pk,
            arrival_date=date(2024, 6, 10),
            departure_date=date(2024, 6, 12),
        )
        try:
            barrier.wait()
            results.append(AdmitReservationHandler().handle(command))
        except Exception as exc:
            results.append(exc)
        finally:
            connection.close()

    def test_only_one_admission_wins_the_last_room(self) -> None:
        barrier = threading.Barrier(self.workers)
        results: list = []
        threads = [
            threading.Thread(target=self._admit, args=(barrier, results))
            for _ in range(self.workers)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertFalse([r for r in results if isinstance(r, Exception)])
        admitted = [result for result in results if result.success]
        rejected = [result for result in results if not result.success]
        self.assertEqual(len(admitted), 1)
        self.assertEqual(len(rejected), self.workers - 1)
        self.assertTrue(all(r.reason == AdmissionReason.NO_ROOMS_AVAILABLE for r in rejected))
        self.assertEqual(Reservation.objects.count(), 1)
