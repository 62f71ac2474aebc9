"""Guests app package.

Holds the guest record that reservations point at. Profile management,
preferences and history belong to the CRM and live elsewhere.
"""
