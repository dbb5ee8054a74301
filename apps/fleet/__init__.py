"""Fleet app package.

This app holds the car inventory: the car model and entity, payload
validation, the car repository and the administrative car API
including bulk delete and bulk update.
"""
