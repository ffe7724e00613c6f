"""
Bookmark Checker v1 - Session API

FastAPI application holding one in-memory bookmark session.
"""

__version__ = "1.0.0"
