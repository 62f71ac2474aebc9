from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("properties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="RatePlan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                ("description", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "min_length_of_stay",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        help_text="Minimum nights; empty means no lower bound.",
                        null=True,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                (
                    "max_length_of_stay",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        help_text="Maximum nights; empty means no upper bound.",
                        null=True,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("cancellation_policy", models.TextField(blank=True)),
                ("is_refundable", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rate_plans",
                        to="properties.property",
                    ),
                ),
            ],
            options={
                "verbose_name": "Rate plan",
                "verbose_name_plural": "Rate plans",
                "ordering": ["property", "id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(min_length_of_stay__isnull=True)
                            | models.Q(max_length_of_stay__isnull=True)
                            | models.Q(max_length_of_stay__gte=models.F("min_length_of_stay"))
                        ),
                        name="rate_plan_los_bounds_valid",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="DailyRate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                (
                    "rate",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("min_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("max_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("close_to_arrival", models.BooleanField(default=False)),
                ("close_to_departure", models.BooleanField(default=False)),
                ("stop_sell", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="daily_rates",
                        to="properties.property",
                    ),
                ),
                (
                    "rate_plan",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="daily_rates",
                        to="rates.rateplan",
                    ),
                ),
                (
                    "room_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="daily_rates",
                        to="properties.roomtype",
                    ),
                ),
            ],
            options={
                "verbose_name": "Daily rate",
                "verbose_name_plural": "Daily rates",
                "ordering": ["date"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("room_type", "rate_plan", "date"),
                        name="daily_rate_unique_per_plan_date",
                    ),
                ],
                "indexes": [
                    models.Index(
                        fields=["property", "room_type", "date"],
                        name="daily_rate_property_type_idx",
                    ),
                ],
            },
        ),
    ]
