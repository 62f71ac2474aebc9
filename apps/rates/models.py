"""Rate plan and daily rate models."""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class RatePlanQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def valid_for_stay(self, nights: int):
        """Plans whose length-of-stay bounds contain ``nights``; a null bound is unbounded."""
        return self.filter(
            models.Q(min_length_of_stay__isnull=True) | models.Q(min_length_of_stay__lte=nights),
            models.Q(max_length_of_stay__isnull=True) | models.Q(max_length_of_stay__gte=nights),
        )


class RatePlan(models.Model):
    """A sellable price plan (BAR, non-refundable, weekly, ...)."""

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="rate_plans",
    )
    name = models.CharField(max_length=120)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    min_length_of_stay = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        help_text=_("Minimum nights; empty means no lower bound."),
    )
    max_length_of_stay = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        help_text=_("Maximum nights; empty means no upper bound."),
    )
    cancellation_policy = models.TextField(blank=True)
    is_refundable = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RatePlanQuerySet.as_manager()

    class Meta:
        verbose_name = _("Rate plan")
        verbose_name_plural = _("Rate plans")
        ordering = ["property", "id"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(min_length_of_stay__isnull=True)
                    | models.Q(max_length_of_stay__isnull=True)
                    | models.Q(max_length_of_stay__gte=models.F("min_length_of_stay"))
                ),
                name="rate_plan_los_bounds_valid",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    def clean(self) -> None:
        if (
            self.min_length_of_stay is not None
            and self.max_length_of_stay is not None
            and self.min_length_of_stay > self.max_length_of_stay
        ):
            raise ValidationError(_("Minimum length of stay cannot exceed the maximum."))

    def length_of_stay_violation(self, nights: int) -> str | None:
        """Return the rejection message for ``nights`` or None when the stay fits."""
        if self.min_length_of_stay is not None and nights < self.min_length_of_stay:
            return f"Minimum length of stay is {self.min_length_of_stay} nights"
        if self.max_length_of_stay is not None and nights > self.max_length_of_stay:
            return f"Maximum length of stay is {self.max_length_of_stay} nights"
        return None


class DailyRate(models.Model):
    """Nightly price and selling restrictions for one room type, plan and date."""

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="daily_rates",
    )
    room_type = models.ForeignKey(
        "properties.RoomType",
        on_delete=models.CASCADE,
        related_name="daily_rates",
    )
    rate_plan = models.ForeignKey(
        RatePlan,
        on_delete=models.CASCADE,
        related_name="daily_rates",
    )
    date = models.DateField()
    rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    min_rate = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    max_rate = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    close_to_arrival = models.BooleanField(default=False)
    close_to_departure = models.BooleanField(default=False)
    stop_sell = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Daily rate")
        verbose_name_plural = _("Daily rates")
        ordering = ["date"]
        constraints = [
            models.UniqueConstraint(
                fields=["room_type", "rate_plan", "date"],
                name="daily_rate_unique_per_plan_date",
            ),
        ]
        indexes = [
            models.Index(
                fields=["property", "room_type", "date"],
                name="daily_rate_property_type_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.rate_plan_id}/{self.room_type_id} {self.date}: {self.rate}"
