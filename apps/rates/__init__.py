"""Rates app package.

Rate plans and their per-date price rows. The rows also carry the
selling restrictions (stop-sell, close-to-arrival, close-to-departure)
that gate admission for a room type on a given date.
"""
