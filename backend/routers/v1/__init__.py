"""API v1 Route modules."""

from backend.routers.v1 import payroll

__all__ = ["payroll"]
