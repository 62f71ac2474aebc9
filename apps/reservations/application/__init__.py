"""Reservation use cases."""
