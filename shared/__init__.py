"""
Shared Kernel

Base domain classes, the error taxonomy, payload helpers, the unit of work
and the representation adapters used by the fleet, bookings and analytics apps.
"""
