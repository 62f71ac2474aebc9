"""App configuration for reservations."""

from __future__ import annotations

import logging

from django.apps import AppConfig  # type: ignore

logger = logging.getLogger(__name__)


def log_reservation_event(event) -> None:
    logger.info(f"{event.event_type}: {event.to_dict()}")


class ReservationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.reservations"
    label = "reservations"
    verbose_name = "Reservations"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus

        from .application import command_handlers as handlers
        from .domain import events

        message_bus.register_command_handler(
            handlers.AdmitReservationCommand, handlers.AdmitReservationHandler(), replace=True
        )
        message_bus.register_command_handler(
            handlers.CheckInReservationCommand, handlers.CheckInReservationHandler(), replace=True
        )
        message_bus.register_command_handler(
            handlers.CheckOutReservationCommand, handlers.CheckOutReservationHandler(), replace=True
        )
        message_bus.register_command_handler(
            handlers.CancelReservationCommand, handlers.CancelReservationHandler(), replace=True
        )
        message_bus.register_command_handler(
            handlers.MarkNoShowCommand, handlers.MarkNoShowHandler(), replace=True
        )

        for event_type in (
            events.ReservationConfirmed,
            events.ReservationCheckedIn,
            events.ReservationCheckedOut,
            events.ReservationCancelled,
            events.ReservationMarkedNoShow,
        ):
            message_bus.register_event_handler(event_type, log_reservation_event)
