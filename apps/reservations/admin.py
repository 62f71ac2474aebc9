"""Admin registration for reservations."""

from __future__ import annotations

from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "confirmation_number",
        "property",
        "guest",
        "room_type",
        "room",
        "status",
        "holds_room",
        "arrival_date",
        "departure_date",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "property", "room_type", "arrival_date", "source")
    search_fields = ("confirmation_number", "guest__last_name", "guest__email")
    readonly_fields = (
        "confirmation_number",
        "nights",
        "check_in_time",
        "check_out_time",
        "created_at",
        "updated_at",
    )

    @admin.display(boolean=True, description="Holds room")
    def holds_room(self, obj):  # type: ignore
        return obj.consumes_inventory()
