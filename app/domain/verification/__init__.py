"""
Verification Domain

One-time SMS codes that prove a patient owns a phone number before an
account is created for it.
"""

from .router import router

__all__ = ["router"]
