"""Analytics app package.

Dashboard statistics computed over bookings and the car inventory.
"""
