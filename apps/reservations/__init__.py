"""Reservations app package.

Admission control for hotel reservations: a request is admitted only if
a rate covers every night, a room of the requested type is free on every
night and no selling restriction applies. The check and the insert run
in one transaction under a per-room-type row lock, so two requests for
the last room cannot both succeed.
"""
