"""Property domain models.

A property (hotel) owns room types, and every sellable room belongs to
exactly one room type. Only active rooms count toward a room type's
inventory; rooms are created and deactivated by property management.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Property(models.Model):
    """A hotel managed by the system."""

    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=120)
    state = models.CharField(max_length=120, blank=True)
    country = models.CharField(max_length=120)
    postal_code = models.CharField(max_length=20, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)
    currency = models.CharField(max_length=3, default="USD")
    timezone = models.CharField(max_length=64, default="UTC")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class RoomType(models.Model):
    """A category of rooms sold as one inventory pool."""

    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name="room_types",
    )
    name = models.CharField(max_length=120)
    description = models.TextField(blank=True)
    max_occupancy = models.PositiveSmallIntegerField(
        default=2,
        validators=[MinValueValidator(1)],
    )
    base_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Display rate only; admission prices stays from daily rates."),
    )
    amenities = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room type")
        verbose_name_plural = _("Room types")
        ordering = ["property", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["property", "name"],
                name="room_type_unique_name_per_property",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.property_id})"


class Room(models.Model):
    """A physical room. Assigned to a reservation at check-in."""

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        OCCUPIED = "occupied", _("Occupied")
        DIRTY = "dirty", _("Dirty")
        CLEAN = "clean", _("Clean")
        INSPECTED = "inspected", _("Inspected")
        OUT_OF_ORDER = "out_of_order", _("Out of order")
        MAINTENANCE = "maintenance", _("Maintenance")

    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name="rooms",
    )
    room_type = models.ForeignKey(
        RoomType,
        on_delete=models.PROTECT,
        related_name="rooms",
    )
    room_number = models.CharField(max_length=20)
    floor = models.SmallIntegerField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.AVAILABLE,
    )
    is_active = models.BooleanField(default=True)
    notes = models.TextField(blank=True)
    last_cleaned = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["property", "room_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["property", "room_number"],
                name="room_unique_number_per_property",
            ),
        ]
        indexes = [
            models.Index(
                fields=["property", "room_type", "is_active"],
                name="room_property_type_active_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Room {self.room_number}"
