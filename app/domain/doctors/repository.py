"""Doctor repository - Database operations for the doctor directory"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ...models import Doctor


class DoctorRepository:
    """Repository for doctor database operations"""

    @staticmethod
    def get_doctors(
        db: Session, search: Optional[str] = None, specialization: Optional[str] = None
    ) -> list[Doctor]:
        """Get all doctors, newest first"""
        query = db.query(Doctor)

        if search:
            term = search.lower()
            # Literal substring match; % and _ in the search text are escaped
            query = query.filter(
                or_(
                    func.lower(Doctor.name).contains(term, autoescape=True),
                    func.lower(Doctor.specialization).contains(term, autoescape=True),
                )
            )
        if specialization:
            query = query.filter(Doctor.specialization == specialization)

        return query.order_by(Doctor.created_at.desc()).all()

    @staticmethod
    def get_doctor_by_id(db: Session, doctor_id: str) -> Optional[Doctor]:
        return db.query(Doctor).filter(Doctor.id == doctor_id).first()

    @staticmethod
    def get_doctor_by_name(db: Session, name: str) -> Optional[Doctor]:
        return (
            db.query(Doctor)
            .filter(Doctor.name == name)
            .order_by(Doctor.created_at.desc())
            .first()
        )

    @staticmethod
    def create_doctor(db: Session, **doctor_data) -> Doctor:
        doctor = Doctor(**doctor_data)
        db.add(doctor)
        db.commit()
        db.refresh(doctor)
        return doctor

    @staticmethod
    def delete_doctor(db: Session, doctor: Doctor) -> None:
        db.delete(doctor)
        db.commit()
