"""
Bookmark Checker v1 - Check-URL Service

FastAPI service that probes a single URL and reports whether it is reachable.
"""

__version__ = "1.0.0"
