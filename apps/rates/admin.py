"""Admin registrations for rates."""

from __future__ import annotations

from django.contrib import admin

from .models import DailyRate, RatePlan


@admin.register(RatePlan)
class RatePlanAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "property",
        "min_length_of_stay",
        "max_length_of_stay",
        "is_refundable",
        "is_active",
    )
    list_filter = ("is_active", "is_refundable", "property")
    search_fields = ("name", "property__name")


@admin.register(DailyRate)
class DailyRateAdmin(admin.ModelAdmin):
    list_display = (
        "date",
        "room_type",
        "rate_plan",
        "rate",
        "stop_sell",
        "close_to_arrival",
        "close_to_departure",
    )
    list_filter = ("stop_sell", "close_to_arrival", "close_to_departure", "rate_plan", "room_type")
    date_hierarchy = "date"
