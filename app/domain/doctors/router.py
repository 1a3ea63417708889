"""Doctor router - FastAPI endpoints for the doctor directory"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ... import config
from ...auth import require_admin
from ...database import get_db
from ...models import Doctor
from .schemas import DoctorCreate, DoctorRateResponse, DoctorResponse
from .service import DoctorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def get_doctor_service(db: Session = Depends(get_db)) -> DoctorService:
    """Dependency injection for DoctorService"""
    return DoctorService(db)


def to_doctor_response(doctor: Doctor) -> DoctorResponse:
    return DoctorResponse(
        id=doctor.id,
        name=doctor.name,
        email=doctor.email,
        phone=doctor.phone,
        specialization=doctor.specialization,
        experience=doctor.experience,
        rate=doctor.rate if doctor.rate is not None else config.DEFAULT_DOCTOR_RATE,
        availability=doctor.availability,
        availabilityEndTime=doctor.availability_end_time,
        image=doctor.image,
        createdAt=doctor.created_at,
    )


@router.get("", response_model=list[DoctorResponse])
async def get_doctors(
    search: Optional[str] = Query(None),
    specialization: Optional[str] = Query(None),
    service: DoctorService = Depends(get_doctor_service),
):
    """List doctors, newest first, optionally filtered by name/specialization"""
    return [to_doctor_response(d) for d in service.get_doctors(search, specialization)]


@router.get("/rate", response_model=DoctorRateResponse)
async def get_doctor_rate(
    name: str = Query(...),
    service: DoctorService = Depends(get_doctor_service),
):
    """Consultation fee charged for a doctor"""
    return DoctorRateResponse(name=name, rate=service.get_rate_for(name))


@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(
    doctor_id: str,
    service: DoctorService = Depends(get_doctor_service),
):
    return to_doctor_response(service.get_doctor(doctor_id))


@router.post(
    "",
    response_model=DoctorResponse,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def create_doctor(
    name: str = Form(...),
    email: str = Form(...),
    phone: str = Form(...),
    specialization: str = Form(...),
    experience: str = Form(...),
    rate: Optional[float] = Form(None),
    availability: str = Form("09:00 - 17:00"),
    image: Optional[UploadFile] = File(None),
    service: DoctorService = Depends(get_doctor_service),
):
    """Add a doctor (admin). Accepts multipart form data with an optional image"""
    try:
        data = DoctorCreate(
            name=name,
            email=email,
            phone=phone,
            specialization=specialization,
            experience=experience,
            rate=rate,
            availability=availability,
        )
    except ValidationError as e:
        logger.warning(f"Doctor validation failed: {e.errors()}")
        raise HTTPException(
            status_code=422, detail=[err["msg"] for err in e.errors()]
        ) from e

    image_content = None
    if image is not None and image.filename:
        image_content = await image.read()

    doctor = service.create_doctor(
        data,
        image_content=image_content,
        image_filename=image.filename if image is not None else None,
        image_content_type=image.content_type if image is not None else None,
    )
    return to_doctor_response(doctor)


@router.delete("/{doctor_id}", dependencies=[Depends(require_admin)])
async def delete_doctor(
    doctor_id: str,
    service: DoctorService = Depends(get_doctor_service),
):
    """Delete a doctor (admin)"""
    return service.delete_doctor(doctor_id)
