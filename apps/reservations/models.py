"""Reservation model."""

from __future__ import annotations

import secrets
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class ReservationQuerySet(models.QuerySet):
    def consuming_inventory(self):
        """Reservations that hold a room: confirmed or checked in."""
        return self.filter(status__in=Reservation.INVENTORY_STATUSES)

    def occupying_night(self, night):
        """Half-open stay: arrival <= night < departure."""
        return self.filter(arrival_date__lte=night, departure_date__gt=night)

    def for_room_type(self, property_id, room_type_id):
        return self.filter(property_id=property_id, room_type_id=room_type_id)


class Reservation(models.Model):
    """A booking of one room of a room type for a stay."""

    class Status(models.TextChoices):
        CONFIRMED = "confirmed", _("Confirmed")
        CHECKED_IN = "checked_in", _("Checked in")
        CHECKED_OUT = "checked_out", _("Checked out")
        CANCELLED = "cancelled", _("Cancelled")
        NO_SHOW = "no_show", _("No show")
        PENDING = "pending", _("Pending")

    INVENTORY_STATUSES = (Status.CONFIRMED, Status.CHECKED_IN)

    confirmation_number = models.CharField(max_length=32, unique=True, editable=False)
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    guest = models.ForeignKey(
        "guests.Guest",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    room_type = models.ForeignKey(
        "properties.RoomType",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    room = models.ForeignKey(
        "properties.Room",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reservations",
        help_text=_("Assigned at check-in."),
    )
    rate_plan = models.ForeignKey(
        "rates.RatePlan",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    arrival_date = models.DateField()
    departure_date = models.DateField(help_text=_("Exclusive: the guest does not stay this night."))
    nights = models.PositiveSmallIntegerField()
    adults = models.PositiveSmallIntegerField(default=1)
    children = models.PositiveSmallIntegerField(default=0)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    deposit_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    deposit_paid = models.BooleanField(default=False)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.CONFIRMED,
    )
    source = models.CharField(max_length=30, default="direct")
    special_requests = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    check_in_time = models.DateTimeField(null=True, blank=True)
    check_out_time = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_reservations",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ReservationQuerySet.as_manager()

    class Meta:
        verbose_name = _("Reservation")
        verbose_name_plural = _("Reservations")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(departure_date__gt=models.F("arrival_date")),
                name="reservation_valid_dates",
            ),
        ]
        indexes = [
            models.Index(
                fields=["property", "room_type", "arrival_date", "departure_date"],
                name="reservation_stay_idx",
            ),
            models.Index(fields=["status"], name="reservation_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Reservation {self.confirmation_number}"

    def clean(self) -> None:
        if self.arrival_date and self.departure_date and self.departure_date <= self.arrival_date:
            raise ValidationError(_("Departure date must be after arrival date."))

    def save(self, *args, **kwargs):  # type: ignore
        if self._state.adding and not self.confirmation_number:
            self.confirmation_number = self.generate_confirmation_number()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_confirmation_number() -> str:
        """RES-<UTC timestamp><random hex>, e.g. RES-20240610153000A1B2C3."""
        timestamp = timezone.now().strftime("%Y%m%d%H%M%S")
        return f"RES-{timestamp}{secrets.token_hex(3).upper()}"

    def consumes_inventory(self) -> bool:
        """Whether this reservation holds a room of its type."""
        return self.status in self.INVENTORY_STATUSES
