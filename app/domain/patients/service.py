"""Patient service - Account creation and patient registration"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Patient, User
from ..verification.service import VerificationService
from .repository import PatientRepository
from .schemas import PatientRegistration, UserCreate

logger = logging.getLogger(__name__)


class PatientService:
    """Service layer for patient business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PatientRepository()
        self.verification = VerificationService(db)

    def create_user(self, data: UserCreate) -> User:
        """
        Create a patient account. The phone must hold a live verified code;
        an email that is already registered returns the existing account.
        """
        if not self.verification.is_verified(data.phone):
            logger.warning(f"⚠️ Account creation refused, phone not verified: {data.phone}")
            raise HTTPException(status_code=403, detail="Phone number not verified")

        existing = self.repo.get_user_by_email(self.db, data.email)
        if existing:
            logger.info(f"👤 Returning existing account for {data.email}")
            return existing

        try:
            user = self.repo.create_user(
                self.db, name=data.name, email=data.email, phone=data.phone
            )
        except Exception as e:
            logger.error(f"❌ Error creating user {data.email}: {str(e)}")
            self.db.rollback()
            raise HTTPException(status_code=500, detail="Failed to create account") from e

        logger.info(f"✅ Account created: {user.id}")
        return user

    def get_user(self, user_id: str) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    def register_patient(self, user_id: str, data: PatientRegistration) -> Patient:
        """Store the registration details for an existing account"""
        self.get_user(user_id)

        if self.repo.get_patient_by_user_id(self.db, user_id):
            raise HTTPException(status_code=409, detail="Patient already registered")

        try:
            patient = self.repo.create_patient(
                self.db,
                user_id,
                name=data.name,
                email=data.email,
                phone=data.phone,
                birth_date=data.birthDate,
                gender=data.gender,
                address=data.address,
                occupation=data.occupation,
                emergency_contact_name=data.emergencyContactName,
                emergency_contact_number=data.emergencyContactNumber,
                primary_physician=data.primaryPhysician,
                insurance_provider=data.insuranceProvider,
                insurance_policy_number=data.insurancePolicyNumber,
                allergies=data.allergies,
                current_medication=data.currentMedication,
                family_medical_history=data.familyMedicalHistory,
                past_medical_history=data.pastMedicalHistory,
                identification_type=data.identificationType,
                identification_number=data.identificationNumber,
                treatment_consent=data.treatmentConsent,
                disclosure_consent=data.disclosureConsent,
                privacy_consent=data.privacyConsent,
            )
        except Exception as e:
            logger.error(f"❌ Error registering patient for user {user_id}: {str(e)}")
            self.db.rollback()
            raise HTTPException(status_code=500, detail="Failed to register patient") from e

        logger.info(f"✅ Patient registered: {patient.id} (user {user_id})")
        return patient

    def get_patient_for_user(self, user_id: str) -> Patient:
        patient = self.repo.get_patient_by_user_id(self.db, user_id)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")
        return patient
