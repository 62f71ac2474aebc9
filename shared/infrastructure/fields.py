"""
Custom serializer fields.

Provides CalendarDateField, a DateField that accepts full ISO datetimes
and truncates them to the calendar date (midnight), so a stay requested
as "2024-06-10T15:00:00Z" and a daily rate stored for 2024-06-10 compare
equal.
"""

from rest_framework import serializers  # type: ignore

from shared.domain.value_objects import as_calendar_date


class CalendarDateField(serializers.DateField):
    """
    DateField that normalizes datetimes to dates instead of rejecting them.

    Output is always an ISO date.
    """

    default_error_messages = {
        'invalid': 'Date has wrong format. Use YYYY-MM-DD or an ISO 8601 datetime.',
    }

    def to_internal_value(self, value):
        try:
            return as_calendar_date(value)
        except (TypeError, ValueError):
            self.fail('invalid')
