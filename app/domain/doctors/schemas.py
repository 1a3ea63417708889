"""Doctor domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import parse_availability_range, validate_email


class DoctorCreate(BaseModel):
    """Schema for adding a doctor to the directory"""

    name: str = Field(..., min_length=1, max_length=100)
    email: str
    phone: str = Field(..., min_length=1, max_length=20)
    specialization: str = Field(..., min_length=1, max_length=100)
    experience: str = Field(..., min_length=1, max_length=100)
    rate: Optional[float] = Field(None, ge=0)
    # "HH:MM - HH:MM"
    availability: str = "09:00 - 17:00"

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return validate_email(v)

    @field_validator("availability")
    @classmethod
    def validate_availability(cls, v):
        # Shape check only; the service anchors it to the creation date
        parse_availability_range(v, datetime.utcnow().date())
        return v.strip()


class DoctorResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    specialization: str
    experience: str
    rate: float
    availability: datetime
    availabilityEndTime: datetime
    image: str
    createdAt: Optional[datetime] = None


class DoctorRateResponse(BaseModel):
    name: str
    rate: float
