"""
Appointments Domain

Appointment lifecycle: created as pending after the simulated checkout,
then scheduled or cancelled by an explicit update.
"""

from .router import admin_router, router

__all__ = ["router", "admin_router"]
