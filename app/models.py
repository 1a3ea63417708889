import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base

DOCTOR_PLACEHOLDER_IMAGE = "/assets/icons/doctor-placeholder.svg"


def generate_public_id():
    """Generate a unique document ID"""
    return str(uuid.uuid4())


class User(Base):
    """Patient account, created once the phone number is verified"""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(20), index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    patient = relationship("Patient", back_populates="user", uselist=False)


class Patient(Base):
    __tablename__ = "patients"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)
    birth_date = Column(Date, nullable=False)
    gender = Column(String(10), nullable=False)  # Male, Female, Other
    address = Column(String(500), nullable=False)
    occupation = Column(String(500), nullable=False)
    emergency_contact_name = Column(String(100), nullable=False)
    emergency_contact_number = Column(String(20), nullable=False)
    primary_physician = Column(String(100), nullable=False)
    insurance_provider = Column(String(100), nullable=False)
    insurance_policy_number = Column(String(100), nullable=False)
    allergies = Column(Text, nullable=True)
    current_medication = Column(Text, nullable=True)
    family_medical_history = Column(Text, nullable=True)
    past_medical_history = Column(Text, nullable=True)
    identification_type = Column(String(100), nullable=True)
    identification_number = Column(String(100), nullable=True)
    treatment_consent = Column(Boolean, default=False, nullable=False)
    disclosure_consent = Column(Boolean, default=False, nullable=False)
    privacy_consent = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="patient")
    appointments = relationship("Appointment", back_populates="patient")


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    name = Column(String(100), index=True, nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)
    specialization = Column(String(100), nullable=False)
    experience = Column(String(100), nullable=False)
    rate = Column(Float, nullable=True)  # Consultation fee; callers fall back to the default rate
    # Single-day window anchored to the creation date, not a recurring slot
    availability = Column(DateTime, nullable=False)
    availability_end_time = Column(DateTime, nullable=False)
    image = Column(String(500), default=DOCTOR_PLACEHOLDER_IMAGE, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    patient_id = Column(String(36), ForeignKey("patients.id"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    primary_physician = Column(String(100), nullable=False)
    schedule = Column(DateTime, nullable=False)
    status = Column(String(20), default="pending", nullable=False)  # pending, scheduled, cancelled
    reason = Column(Text, nullable=False)
    note = Column(Text, nullable=True)
    cancellation_reason = Column(Text, nullable=True)  # set only while cancelled
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    patient = relationship("Patient", back_populates="appointments")


class VerificationRecord(Base):
    """One-time phone verification code"""

    __tablename__ = "verification_records"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    phone = Column(String(20), index=True, nullable=False)
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime, index=True, nullable=False)
    attempts = Column(Integer, default=0, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
