"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Property, Room, RoomType


class RoomTypeInline(admin.TabularInline):
    model = RoomType
    extra = 0
    fields = ("name", "max_occupancy", "base_rate", "is_active")


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "country", "currency", "is_active")
    list_filter = ("is_active", "country")
    search_fields = ("name", "city")
    inlines = [RoomTypeInline]


@admin.register(RoomType)
class RoomTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "property", "max_occupancy", "base_rate", "is_active")
    list_filter = ("is_active", "property")
    search_fields = ("name", "property__name")


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("room_number", "property", "room_type", "floor", "status", "is_active")
    list_filter = ("status", "is_active", "property", "room_type")
    search_fields = ("room_number", "property__name")
