"""Verification router - Phone verification endpoints"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.validators import validate_e164_phone
from .schemas import (
    CheckCodeRequest,
    SendCodeRequest,
    VerificationResult,
    VerificationStatusResponse,
)
from .service import VerificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/verification", tags=["Verification"])


def get_verification_service(db: Session = Depends(get_db)) -> VerificationService:
    """Dependency injection for VerificationService"""
    return VerificationService(db)


@router.post("/send-code", response_model=VerificationResult)
async def send_code(
    request: SendCodeRequest,
    service: VerificationService = Depends(get_verification_service),
):
    """Generate a code for the phone and send it by SMS"""
    logger.info(f"📨 Verification code requested for {request.phone}")
    return await service.send_code(request.phone)


@router.post("/check-code", response_model=VerificationResult)
async def check_code(
    request: CheckCodeRequest,
    service: VerificationService = Depends(get_verification_service),
):
    """Check a submitted verification code"""
    logger.info(f"🔍 Verification check for {request.phone}")
    return await service.check_code(request.phone, request.code)


@router.get("/status", response_model=VerificationStatusResponse)
async def get_verification_status(
    phone: str = Query(...),
    service: VerificationService = Depends(get_verification_service),
):
    """Whether the phone currently holds a verified, unexpired code"""
    try:
        phone = validate_e164_phone(phone)
    except ValueError:
        # Malformed numbers can never be verified
        return VerificationStatusResponse(phone=phone, verified=False)
    return VerificationStatusResponse(phone=phone, verified=service.is_verified(phone))
