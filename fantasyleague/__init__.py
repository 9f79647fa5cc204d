"""Fantasy football league services, JSON responses and WSGI middleware."""

__version__ = "0.1.0"