"""Doctor service - Business logic for the doctor directory"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ... import config
from ...models import DOCTOR_PLACEHOLDER_IMAGE, Doctor
from ...shared.validators import parse_availability_range
from ...utils import image_storage
from .repository import DoctorRepository
from .schemas import DoctorCreate

logger = logging.getLogger(__name__)


class DoctorService:
    """Service layer for doctor directory business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = DoctorRepository()

    def get_doctors(
        self, search: Optional[str] = None, specialization: Optional[str] = None
    ) -> list[Doctor]:
        return self.repo.get_doctors(self.db, search=search, specialization=specialization)

    def get_doctor(self, doctor_id: str) -> Doctor:
        doctor = self.repo.get_doctor_by_id(self.db, doctor_id)
        if not doctor:
            raise HTTPException(status_code=404, detail="Doctor not found")
        return doctor

    def create_doctor(
        self,
        data: DoctorCreate,
        image_content: Optional[bytes] = None,
        image_filename: Optional[str] = None,
        image_content_type: Optional[str] = None,
        on_date: Optional[date] = None,
    ) -> Doctor:
        """
        Add a doctor, uploading the profile image first when one is given.

        The availability window is stored as two full timestamps on the
        creation date (or ``on_date``); it is not a recurring slot.
        """
        logger.info(f"📥 Creating doctor: {data.name}")

        try:
            start, end = parse_availability_range(
                data.availability, on_date or datetime.utcnow().date()
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        image_url = DOCTOR_PLACEHOLDER_IMAGE
        if image_content:
            is_valid, error = image_storage.validate_image_file(
                image_filename, len(image_content), image_content_type
            )
            if not is_valid:
                raise HTTPException(status_code=400, detail=error)

            key = image_storage.generate_doctor_image_key(image_filename)
            try:
                image_url = image_storage.upload_image(image_content, key, image_content_type)
            except Exception as e:
                logger.error(f"❌ Doctor image upload failed: {str(e)}")
                raise HTTPException(status_code=500, detail="Failed to upload doctor image") from e

        try:
            return self.repo.create_doctor(
                self.db,
                name=data.name,
                email=data.email,
                phone=data.phone,
                specialization=data.specialization,
                experience=data.experience,
                rate=data.rate if data.rate is not None else config.DEFAULT_DOCTOR_RATE,
                availability=start,
                availability_end_time=end,
                image=image_url,
            )
        except Exception as e:
            logger.error(f"❌ Error creating doctor: {str(e)}")
            self.db.rollback()
            raise HTTPException(status_code=500, detail="Failed to create doctor") from e

    def delete_doctor(self, doctor_id: str) -> dict:
        """Delete a doctor; a custom image is removed too on a best-effort basis"""
        doctor = self.get_doctor(doctor_id)

        if doctor.image and DOCTOR_PLACEHOLDER_IMAGE not in doctor.image:
            key = image_storage.key_from_image_url(doctor.image)
            try:
                if not key:
                    raise ValueError(f"Unrecognised image URL: {doctor.image}")
                image_storage.delete_image(key)
            except Exception as e:
                # Doctor deletion proceeds regardless
                logger.error(f"❌ Error deleting doctor image for {doctor_id}: {str(e)}")

        try:
            self.repo.delete_doctor(self.db, doctor)
        except Exception as e:
            logger.error(f"❌ Error deleting doctor {doctor_id}: {str(e)}")
            self.db.rollback()
            raise HTTPException(status_code=500, detail="Failed to delete doctor") from e

        logger.info(f"🗑️ Doctor deleted: {doctor_id}")
        return {"success": True}

    def get_rate_for(self, doctor_name: Optional[str]) -> float:
        """Consultation fee for a doctor by name, falling back to the default rate"""
        if not doctor_name:
            return config.DEFAULT_DOCTOR_RATE
        doctor = self.repo.get_doctor_by_name(self.db, doctor_name)
        if doctor is None or doctor.rate is None:
            return config.DEFAULT_DOCTOR_RATE
        return float(doctor.rate)
