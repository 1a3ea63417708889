"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import to_naive_utc
from ..payments.schemas import PaymentDetails, PaymentSummary

AppointmentStatus = Literal["pending", "scheduled", "cancelled"]


class AppointmentCreate(BaseModel):
    """Schema for requesting a new appointment"""

    userId: str
    patientId: str
    primaryPhysician: str = Field(..., min_length=2, max_length=100)
    schedule: datetime
    reason: str = Field(..., min_length=2, max_length=500)
    note: Optional[str] = Field(None, max_length=500)

    @field_validator("schedule")
    @classmethod
    def normalize_schedule(cls, v):
        return to_naive_utc(v)


class CheckoutRequest(BaseModel):
    """New appointment plus the (simulated) payment that pays for it"""

    appointment: AppointmentCreate
    payment: PaymentDetails


class AppointmentPatch(BaseModel):
    """Fields an admin may change while scheduling or cancelling"""

    primaryPhysician: Optional[str] = Field(None, min_length=2, max_length=100)
    schedule: Optional[datetime] = None
    cancellationReason: Optional[str] = Field(None, max_length=500)

    @field_validator("schedule")
    @classmethod
    def normalize_schedule(cls, v):
        return to_naive_utc(v)


class AppointmentUpdate(BaseModel):
    """Schedule or cancel an appointment"""

    type: Literal["schedule", "cancel"]
    appointment: AppointmentPatch = Field(default_factory=AppointmentPatch)

    @model_validator(mode="after")
    def require_cancellation_reason(self):
        if self.type == "cancel":
            reason = (self.appointment.cancellationReason or "").strip()
            if len(reason) < 2:
                raise ValueError(
                    "Cancellation reason is required and must be at least 2 characters"
                )
            self.appointment.cancellationReason = reason
        return self


class AppointmentResponse(BaseModel):
    id: str
    userId: str
    patientId: str
    patientName: Optional[str] = None
    primaryPhysician: str
    schedule: datetime
    status: AppointmentStatus
    reason: str
    note: Optional[str] = None
    cancellationReason: Optional[str] = None
    createdAt: Optional[datetime] = None


class CheckoutResponse(BaseModel):
    appointment: AppointmentResponse
    payment: PaymentSummary


class AppointmentListResponse(BaseModel):
    """Admin dashboard payload"""

    totalCount: int
    scheduledCount: int
    pendingCount: int
    cancelledCount: int
    documents: list[AppointmentResponse]
