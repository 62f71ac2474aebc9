"""URL routing for the rates domain."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import DailyRateUpsertView, RateCalculateView

urlpatterns = [
    path(
        "properties/<int:property_id>/rates/calculate/",
        RateCalculateView.as_view(),
        name="rate-calculate",
    ),
    path(
        "properties/<int:property_id>/rates/daily/",
        DailyRateUpsertView.as_view(),
        name="daily-rate-upsert",
    ),
]
