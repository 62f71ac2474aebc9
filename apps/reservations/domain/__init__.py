"""Reservation domain layer: inventory ledger, result types, events."""
