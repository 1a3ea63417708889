"""Patient router - FastAPI endpoints for patient accounts and registration"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Patient, User
from .schemas import PatientRegistration, PatientResponse, UserCreate, UserResponse
from .service import PatientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["Patients"])


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    """Dependency injection for PatientService"""
    return PatientService(db)


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        createdAt=user.created_at,
    )


def to_patient_response(patient: Patient) -> PatientResponse:
    return PatientResponse(
        id=patient.id,
        userId=patient.user_id,
        name=patient.name,
        email=patient.email,
        phone=patient.phone,
        birthDate=patient.birth_date,
        gender=patient.gender,
        address=patient.address,
        occupation=patient.occupation,
        emergencyContactName=patient.emergency_contact_name,
        emergencyContactNumber=patient.emergency_contact_number,
        primaryPhysician=patient.primary_physician,
        insuranceProvider=patient.insurance_provider,
        insurancePolicyNumber=patient.insurance_policy_number,
        allergies=patient.allergies,
        currentMedication=patient.current_medication,
        familyMedicalHistory=patient.family_medical_history,
        pastMedicalHistory=patient.past_medical_history,
        identificationType=patient.identification_type,
        identificationNumber=patient.identification_number,
        createdAt=patient.created_at,
    )


@router.post("/users", response_model=UserResponse)
async def create_user(
    data: UserCreate,
    service: PatientService = Depends(get_patient_service),
):
    """Create a patient account for a verified phone number"""
    return to_user_response(service.create_user(data))


@router.post("/users/{user_id}/register", response_model=PatientResponse, status_code=201)
async def register_patient(
    user_id: str,
    data: PatientRegistration,
    service: PatientService = Depends(get_patient_service),
):
    """Complete patient registration for an account"""
    return to_patient_response(service.register_patient(user_id, data))


@router.get("/users/{user_id}", response_model=PatientResponse)
async def get_patient(
    user_id: str,
    service: PatientService = Depends(get_patient_service),
):
    """Get the registered patient for an account"""
    return to_patient_response(service.get_patient_for_user(user_id))
