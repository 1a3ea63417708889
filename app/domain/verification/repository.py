"""Verification repository - Database operations for phone verification records"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import VerificationRecord


class VerificationRepository:
    """Repository for verification record database operations"""

    @staticmethod
    def get_active(db: Session, phone: str, now: datetime) -> Optional[VerificationRecord]:
        """Get the unexpired record for a phone, if any"""
        return (
            db.query(VerificationRecord)
            .filter(VerificationRecord.phone == phone, VerificationRecord.expires_at > now)
            .order_by(VerificationRecord.created_at.desc())
            .first()
        )

    @staticmethod
    def get_active_verified(db: Session, phone: str, now: datetime) -> Optional[VerificationRecord]:
        return (
            db.query(VerificationRecord)
            .filter(
                VerificationRecord.phone == phone,
                VerificationRecord.verified.is_(True),
                VerificationRecord.expires_at > now,
            )
            .first()
        )

    @staticmethod
    def count_active(db: Session, phone: str, now: datetime) -> int:
        return (
            db.query(VerificationRecord)
            .filter(VerificationRecord.phone == phone, VerificationRecord.expires_at > now)
            .count()
        )

    @staticmethod
    def delete_active(db: Session, phone: str, now: datetime) -> int:
        """Delete every unexpired record for a phone. Returns the number deleted"""
        records = (
            db.query(VerificationRecord)
            .filter(VerificationRecord.phone == phone, VerificationRecord.expires_at > now)
            .all()
        )
        for record in records:
            db.delete(record)
        db.commit()
        return len(records)

    @staticmethod
    def create(db: Session, **record_data) -> VerificationRecord:
        record = VerificationRecord(**record_data)
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def update(db: Session, record: VerificationRecord, **updates) -> VerificationRecord:
        for key, value in updates.items():
            setattr(record, key, value)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def delete(db: Session, record: VerificationRecord) -> None:
        db.delete(record)
        db.commit()
