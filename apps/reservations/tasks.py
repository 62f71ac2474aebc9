"""Celery tasks for the reservation domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from .application.command_handlers import MarkNoShowCommand, MarkNoShowHandler
from .domain.entities import ReservationStateError
from .models import Reservation

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (run by Celery Beat)
# ============================================================================

@shared_task(name="reservations.mark_no_shows")
def mark_no_shows() -> dict[str, int]:
    """
    Mark overdue arrivals as no-shows.

    Confirmed reservations whose arrival date is before today never
    checked in; marking them releases their nights back to inventory.

    Returns:
        dict: {"marked": number of reservations marked}
    """
    today = timezone.localdate()
    overdue_ids = list(
        Reservation.objects.filter(
            status=Reservation.Status.CONFIRMED,
            arrival_date__lt=today,
        ).values_list("id", flat=True)
    )

    handler = MarkNoShowHandler()
    marked = 0
    for reservation_id in overdue_ids:
        try:
            handler.handle(MarkNoShowCommand(reservation_id=reservation_id))
            marked += 1
        except (Reservation.DoesNotExist, ReservationStateError) as exc:
            # Changed by someone else since the scan
            logger.info(f"Skipping reservation {reservation_id}: {exc}")

    if marked:
        logger.info(f"Marked {marked} reservations as no-show")
    return {"marked": marked}
