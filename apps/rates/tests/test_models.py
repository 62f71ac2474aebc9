"""Tests for rate plan length-of-stay rules."""

from __future__ import annotations

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from apps.properties.tests.factories import create_property, create_rate_plan
from apps.rates.models import RatePlan

pytestmark = pytest.mark.django_db


def test_null_bounds_are_unbounded():
    plan = create_rate_plan(create_property())

    assert plan.length_of_stay_violation(1) is None
    assert plan.length_of_stay_violation(365) is None


def test_minimum_length_of_stay_message():
    plan = create_rate_plan(create_property(), min_length_of_stay=7)

    assert plan.length_of_stay_violation(3) == "Minimum length of stay is 7 nights"
    assert plan.length_of_stay_violation(7) is None


def test_maximum_length_of_stay_message():
    plan = create_rate_plan(create_property(), max_length_of_stay=14)

    assert plan.length_of_stay_violation(15) == "Maximum length of stay is 14 nights"
    assert plan.length_of_stay_violation(14) is None


def test_valid_for_stay_queryset():
    property_obj = create_property()
    open_plan = create_rate_plan(property_obj, "Open")
    weekly = create_rate_plan(property_obj, "Weekly", min_length_of_stay=7)
    short = create_rate_plan(property_obj, "Short", max_length_of_stay=3)

    assert set(RatePlan.objects.valid_for_stay(2)) == {open_plan, short}
    assert set(RatePlan.objects.valid_for_stay(8)) == {open_plan, weekly}


def test_clean_rejects_inverted_bounds():
    plan = RatePlan(property=create_property(), name="Broken", min_length_of_stay=5, max_length_of_stay=2)

    with pytest.raises(ValidationError):
        plan.clean()


def test_database_rejects_inverted_bounds():
    property_obj = create_property()

    with pytest.raises(IntegrityError), transaction.atomic():
        RatePlan.objects.create(property=property_obj, name="Broken", min_length_of_stay=5, max_length_of_stay=2)
