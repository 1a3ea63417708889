"""Appointment repository - Database operations for appointments"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Appointment


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: str) -> Optional[Appointment]:
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.patient))
            .filter(Appointment.id == appointment_id)
            .first()
        )

    @staticmethod
    def get_recent_appointments(db: Session) -> list[Appointment]:
        """All appointments, newest first"""
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.patient))
            .order_by(Appointment.created_at.desc())
            .all()
        )

    @staticmethod
    def get_status_counts(db: Session) -> dict[str, int]:
        rows = (
            db.query(Appointment.status, func.count(Appointment.id))
            .group_by(Appointment.status)
            .all()
        )
        return {status: count for status, count in rows}

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_appointment(db: Session, appointment: Appointment, **updates) -> Appointment:
        """Update an appointment; None clears a nullable column"""
        for key, value in updates.items():
            setattr(appointment, key, value)
        db.commit()
        db.refresh(appointment)
        return appointment
