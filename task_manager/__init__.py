"""Multi-user task manager REST API."""

__version__ = "1.0.0"
