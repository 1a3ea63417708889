"""Appointment router - FastAPI endpoints for the appointment lifecycle"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...models import Appointment
from .schemas import (
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentUpdate,
    CheckoutRequest,
    CheckoutResponse,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])
admin_router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


def to_appointment_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        userId=appointment.user_id,
        patientId=appointment.patient_id,
        patientName=appointment.patient.name if appointment.patient else None,
        primaryPhysician=appointment.primary_physician,
        schedule=appointment.schedule,
        status=appointment.status,
        reason=appointment.reason,
        note=appointment.note,
        cancellationReason=appointment.cancellation_reason,
        createdAt=appointment.created_at,
    )


@router.post("/checkout", response_model=CheckoutResponse, status_code=201)
async def checkout(
    request: CheckoutRequest,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Pay the consultation fee (simulated) and request the appointment"""
    appointment, payment = await service.checkout(request)
    return CheckoutResponse(appointment=to_appointment_response(appointment), payment=payment)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    return to_appointment_response(service.get_appointment(appointment_id))


@router.get("/{appointment_id}/receipt", response_class=PlainTextResponse)
async def get_appointment_receipt(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Download a plain-text receipt"""
    receipt = service.build_receipt(appointment_id)
    return PlainTextResponse(
        receipt,
        headers={
            "Content-Disposition": f'attachment; filename="receipt-{appointment_id[:8]}.txt"'
        },
    )


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Schedule or cancel an appointment"""
    appointment = await service.update_appointment(appointment_id, data)
    return to_appointment_response(appointment)


@admin_router.get("/appointments", response_model=AppointmentListResponse)
async def get_recent_appointments(
    service: AppointmentService = Depends(get_appointment_service),
):
    """Admin dashboard: every appointment with status counts"""
    result = service.get_recent_appointments()
    result["documents"] = [to_appointment_response(a) for a in result["documents"]]
    return AppointmentListResponse(**result)
