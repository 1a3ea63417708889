"""
Patients Domain

Patient accounts (created only for verified phone numbers) and their
registration details.
"""

from .router import router

__all__ = ["router"]
