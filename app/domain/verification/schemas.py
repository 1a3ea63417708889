"""Verification domain schemas - Pydantic models for validation"""

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_e164_phone, validate_verification_code


class SendCodeRequest(BaseModel):
    """Request a verification code for a phone number"""

    phone: str

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return validate_e164_phone(v)


class CheckCodeRequest(BaseModel):
    """Submit a verification code"""

    phone: str
    code: str

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return validate_e164_phone(v)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v):
        return validate_verification_code(v)


class VerificationResult(BaseModel):
    """Outcome of a send or check; failures differ only by message"""

    success: bool
    message: str


class VerificationStatusResponse(BaseModel):
    phone: str
    verified: bool
