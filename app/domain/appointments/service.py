"""Appointment service - Appointment lifecycle (pending -> scheduled / cancelled)"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ... import config
from ...models import Appointment
from ...services import twilio_service
from ..doctors.service import DoctorService
from ..patients.repository import PatientRepository
from ..payments.schemas import PaymentSummary
from ..payments.service import payment_id_for, process_payment
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate, CheckoutRequest

logger = logging.getLogger(__name__)

STATUS_FOR_UPDATE_TYPE = {
    "schedule": "scheduled",
    "cancel": "cancelled",
}


def format_schedule(appointment: Appointment) -> str:
    # Schedules are stored as naive UTC
    return appointment.schedule.strftime("%b %d, %Y, %I:%M %p UTC")


class AppointmentService:
    """
    Service layer for appointment business logic.

    Status is a plain flag: scheduling a cancelled appointment or cancelling
    twice is allowed. The only rule enforced is that a cancellation reason is
    stored exactly while the appointment is cancelled.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.patients = PatientRepository()
        self.doctors = DoctorService(db)

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """Persist a new appointment in pending status"""
        patient = self.patients.get_patient_by_id(self.db, data.patientId)
        if not patient or patient.user_id != data.userId:
            raise HTTPException(status_code=404, detail="Patient not found")

        try:
            appointment = self.repo.create_appointment(
                self.db,
                user_id=data.userId,
                patient_id=data.patientId,
                primary_physician=data.primaryPhysician,
                schedule=data.schedule,
                reason=data.reason,
                note=data.note,
                status="pending",
                cancellation_reason=None,
            )
        except Exception as e:
            logger.error(f"❌ Error creating appointment: {str(e)}")
            self.db.rollback()
            raise HTTPException(status_code=500, detail="Failed to create appointment") from e

        logger.info(f"📅 Appointment created: {appointment.id} (pending)")
        return appointment

    async def checkout(self, request: CheckoutRequest) -> tuple[Appointment, PaymentSummary]:
        """Charge the doctor's fee (simulated) and create the appointment once it clears"""
        amount = self.doctors.get_rate_for(request.appointment.primaryPhysician)

        async def on_payment_complete() -> Appointment:
            return self.create_appointment(request.appointment)

        appointment = await process_payment(request.payment, amount, on_payment_complete)
        summary = PaymentSummary(
            paymentId=payment_id_for(appointment.id),
            amount=amount,
            method=request.payment.describe(),
        )
        return appointment, summary

    async def update_appointment(self, appointment_id: str, data: AppointmentUpdate) -> Appointment:
        """Schedule or cancel; patch fields left out of the request stay unchanged"""
        appointment = self.get_appointment(appointment_id)
        patch = data.appointment

        updates = {"status": STATUS_FOR_UPDATE_TYPE[data.type]}
        if patch.primaryPhysician is not None:
            updates["primary_physician"] = patch.primaryPhysician
        if patch.schedule is not None:
            updates["schedule"] = patch.schedule
        if data.type == "cancel":
            updates["cancellation_reason"] = patch.cancellationReason
        else:
            updates["cancellation_reason"] = None

        try:
            appointment = self.repo.update_appointment(self.db, appointment, **updates)
        except Exception as e:
            logger.error(f"❌ Error updating appointment {appointment_id}: {str(e)}")
            self.db.rollback()
            raise HTTPException(status_code=500, detail="Failed to update appointment") from e

        logger.info(f"📅 Appointment {appointment_id} -> {appointment.status}")

        if config.APPOINTMENT_SMS_NOTIFICATIONS:
            await self._notify_patient(appointment, data.type)

        return appointment

    async def _notify_patient(self, appointment: Appointment, update_type: str) -> None:
        """Text the patient about the change; failures never block the update"""
        phone = appointment.patient.phone if appointment.patient else None
        if not phone:
            return
        try:
            if update_type == "schedule":
                sent, error = await twilio_service.send_appointment_scheduled_sms(
                    phone, appointment.primary_physician, format_schedule(appointment)
                )
            else:
                sent, error = await twilio_service.send_appointment_cancelled_sms(
                    phone, format_schedule(appointment), appointment.cancellation_reason
                )
            if not sent:
                logger.warning(f"⚠️ Appointment SMS not sent for {appointment.id}: {error}")
        except Exception as e:
            logger.error(f"❌ Appointment SMS failed for {appointment.id}: {str(e)}")

    def get_recent_appointments(self) -> dict:
        """All appointments, newest first, with per-status counts"""
        appointments = self.repo.get_recent_appointments(self.db)
        counts = self.repo.get_status_counts(self.db)
        return {
            "totalCount": len(appointments),
            "scheduledCount": counts.get("scheduled", 0),
            "pendingCount": counts.get("pending", 0),
            "cancelledCount": counts.get("cancelled", 0),
            "documents": appointments,
        }

    def build_receipt(self, appointment_id: str) -> str:
        """Plain-text receipt for an appointment and its consultation fee"""
        appointment = self.get_appointment(appointment_id)
        amount = self.doctors.get_rate_for(appointment.primary_physician)
        is_cancelled = appointment.status == "cancelled"

        lines = [
            "CarePulse Receipt",
            "-----------------",
            f"Appointment ID: {appointment.id}",
            f"Doctor: {appointment.primary_physician or 'Unknown'}",
            f"Date: {format_schedule(appointment)}",
            f"Reason: {appointment.reason or 'Not specified'}",
            f"Notes: {appointment.note or 'None'}",
            f"Status: {'Cancelled' if is_cancelled else 'Active'}",
        ]
        if is_cancelled:
            lines.append(f"Cancellation Reason: {appointment.cancellation_reason}")
        lines += [
            "",
            "Payment Details:",
            f"Amount: ${amount:.2f}",
            f"Payment ID: {payment_id_for(appointment.id)}",
            f"Payment Date: {appointment.created_at.strftime('%b %d, %Y')}",
            f"Status: {'Refunded' if is_cancelled else 'Paid'}",
        ]
        return "\n".join(lines) + "\n"
