"""
Doctors Domain

The doctor directory: profiles, consultation rates, one-day availability
windows and profile images stored in R2.
"""

from .router import router

__all__ = ["router"]
