"""Patient repository - Database operations for users and patients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Patient, User


class PatientRepository:
    """Repository for user and patient database operations"""

    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        user = User(**user_data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def get_patient_by_id(db: Session, patient_id: str) -> Optional[Patient]:
        return db.query(Patient).filter(Patient.id == patient_id).first()

    @staticmethod
    def get_patient_by_user_id(db: Session, user_id: str) -> Optional[Patient]:
        return db.query(Patient).filter(Patient.user_id == user_id).first()

    @staticmethod
    def create_patient(db: Session, user_id: str, **patient_data) -> Patient:
        patient = Patient(user_id=user_id, **patient_data)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient
