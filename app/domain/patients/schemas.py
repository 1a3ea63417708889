"""Patient domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_e164_phone, validate_email


class UserCreate(BaseModel):
    """Schema for the 'get started' form"""

    name: str = Field(..., min_length=2, max_length=50)
    email: str
    phone: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return validate_e164_phone(v)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    createdAt: Optional[datetime] = None


class PatientRegistration(BaseModel):
    """Schema for the full patient registration form"""

    name: str = Field(..., min_length=2, max_length=50)
    email: str
    phone: str
    birthDate: date
    gender: Literal["Male", "Female", "Other"]
    address: str = Field(..., min_length=5, max_length=500)
    occupation: str = Field(..., min_length=2, max_length=500)
    emergencyContactName: str = Field(..., min_length=2, max_length=50)
    emergencyContactNumber: str
    primaryPhysician: str = Field(..., min_length=2)
    insuranceProvider: str = Field(..., min_length=2, max_length=50)
    insurancePolicyNumber: str = Field(..., min_length=2, max_length=50)
    allergies: Optional[str] = None
    currentMedication: Optional[str] = None
    familyMedicalHistory: Optional[str] = None
    pastMedicalHistory: Optional[str] = None
    identificationType: Optional[str] = None
    identificationNumber: Optional[str] = None
    treatmentConsent: bool
    disclosureConsent: bool
    privacyConsent: bool

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return validate_email(v)

    @field_validator("phone", "emergencyContactNumber")
    @classmethod
    def validate_phone(cls, v):
        return validate_e164_phone(v)

    @field_validator("treatmentConsent")
    @classmethod
    def validate_treatment_consent(cls, v):
        if not v:
            raise ValueError("You must consent to treatment in order to proceed")
        return v

    @field_validator("disclosureConsent")
    @classmethod
    def validate_disclosure_consent(cls, v):
        if not v:
            raise ValueError("You must consent to disclosure in order to proceed")
        return v

    @field_validator("privacyConsent")
    @classmethod
    def validate_privacy_consent(cls, v):
        if not v:
            raise ValueError("You must consent to privacy in order to proceed")
        return v


class PatientResponse(BaseModel):
    id: str
    userId: str
    name: str
    email: str
    phone: str
    birthDate: date
    gender: str
    address: str
    occupation: str
    emergencyContactName: str
    emergencyContactNumber: str
    primaryPhysician: str
    insuranceProvider: str
    insurancePolicyNumber: str
    allergies: Optional[str] = None
    currentMedication: Optional[str] = None
    familyMedicalHistory: Optional[str] = None
    pastMedicalHistory: Optional[str] = None
    identificationType: Optional[str] = None
    identificationNumber: Optional[str] = None
    createdAt: Optional[datetime] = None
