"""Admin registration for guests."""

from __future__ import annotations

from django.contrib import admin

from .models import Guest


@admin.register(Guest)
class GuestAdmin(admin.ModelAdmin):
    list_display = ("last_name", "first_name", "email", "phone", "vip_status")
    list_filter = ("vip_status",)
    search_fields = ("first_name", "last_name", "email", "phone")
