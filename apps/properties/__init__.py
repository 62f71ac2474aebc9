"""Properties app package.

Hotels, their room types and the physical rooms that make up each room
type's inventory.
"""
