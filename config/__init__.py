"""Top-level package for Django configuration.

It contains settings modules for different environments, the URL
configuration and entry points for WSGI and ASGI.
"""
