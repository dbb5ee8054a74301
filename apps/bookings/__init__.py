"""Bookings app package.

This app encapsulates the booking domain: the booking model and entity,
payload validation, the status machine, the inventory consistency guard
that keeps bookings and cars referentially consistent, and the booking
API used by the public flow and the back office.
"""
