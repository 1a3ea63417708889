"""Verification service - One-time phone verification codes"""

import logging
import secrets
import string
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from ...services import twilio_service
from .repository import VerificationRepository
from .schemas import VerificationResult

logger = logging.getLogger(__name__)

CODE_LENGTH = 6
CODE_TTL_MINUTES = 10
MAX_ATTEMPTS = 5

SEND_FAILED_MESSAGE = "Failed to send verification code. Please try again."
CHECK_FAILED_MESSAGE = "Failed to verify code. Please try again."
NOT_FOUND_MESSAGE = "Verification code expired or not found. Please request a new code."
TOO_MANY_ATTEMPTS_MESSAGE = "Too many failed attempts. Please request a new code."


def generate_code(length: int = CODE_LENGTH) -> str:
    """Generate a cryptographically secure random numeric code"""
    return "".join(secrets.choice(string.digits) for _ in range(length))


class VerificationService:
    """
    Issues and checks phone verification codes.

    There is no per-phone locking: two concurrent check_code calls for the
    same phone read the same attempts value and the last write wins.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = VerificationRepository()

    async def send_code(self, phone: str) -> VerificationResult:
        """Replace any live code for the phone with a fresh one and text it"""
        record = None
        try:
            now = datetime.utcnow()
            removed = self.repo.delete_active(self.db, phone, now)
            if removed:
                logger.info(f"♻️ Invalidated {removed} previous code(s) for {phone}")

            code = generate_code()
            record = self.repo.create(
                self.db,
                phone=phone,
                code=code,
                expires_at=now + timedelta(minutes=CODE_TTL_MINUTES),
                attempts=0,
                verified=False,
            )
            logger.info(f"💾 Verification record stored for {phone}")

            sent, error = await twilio_service.send_verification_code_sms(phone, code)
            if not sent:
                raise RuntimeError(f"SMS delivery failed: {error}")

            return VerificationResult(success=True, message="Verification code sent")

        except Exception as e:
            logger.error(f"❌ Error sending verification SMS to {phone}: {str(e)}")
            self.db.rollback()
            if record is not None:
                # The code never reached the phone, so it must not stay live
                try:
                    self.repo.delete(self.db, record)
                except Exception:
                    logger.exception("Failed to remove undelivered verification record")
                    self.db.rollback()
            return VerificationResult(success=False, message=SEND_FAILED_MESSAGE)

    async def check_code(self, phone: str, code: str) -> VerificationResult:
        """Check a submitted code, counting the attempt against the live record"""
        try:
            record = self.repo.get_active(self.db, phone, datetime.utcnow())
            if not record:
                logger.warning(f"⚠️ No live verification code for {phone}")
                return VerificationResult(success=False, message=NOT_FOUND_MESSAGE)

            if record.verified:
                return VerificationResult(success=True, message="Phone already verified")

            attempts = record.attempts + 1
            if attempts >= MAX_ATTEMPTS:
                self.repo.delete(self.db, record)
                logger.warning(f"🚫 Too many verification attempts for {phone}, code discarded")
                return VerificationResult(success=False, message=TOO_MANY_ATTEMPTS_MESSAGE)

            self.repo.update(self.db, record, attempts=attempts)

            if record.code != code:
                logger.warning(f"❌ Invalid verification code for {phone} (attempt {attempts})")
                return VerificationResult(
                    success=False,
                    message=f"Invalid code. {MAX_ATTEMPTS - attempts} attempts remaining.",
                )

            self.repo.update(self.db, record, verified=True)
            logger.info(f"🎉 Phone verified: {phone}")
            return VerificationResult(success=True, message="Phone verified successfully")

        except Exception as e:
            logger.error(f"❌ Error verifying code for {phone}: {str(e)}")
            self.db.rollback()
            return VerificationResult(success=False, message=CHECK_FAILED_MESSAGE)

    def is_verified(self, phone: str) -> bool:
        """True iff an unexpired, verified record exists for the phone"""
        try:
            return self.repo.get_active_verified(self.db, phone, datetime.utcnow()) is not None
        except Exception as e:
            logger.error(f"❌ Error checking phone verification for {phone}: {str(e)}")
            self.db.rollback()
            return False
