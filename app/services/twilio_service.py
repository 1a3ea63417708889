"""
Twilio SMS Service
Sends verification codes and appointment notices through the Twilio REST API
"""

import logging
from typing import Optional

import httpx

from .. import config

logger = logging.getLogger(__name__)

TWILIO_MESSAGES_URL = "https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json"


def is_configured() -> bool:
    return bool(config.TWILIO_ACCOUNT_SID and config.TWILIO_AUTH_TOKEN and config.TWILIO_PHONE_NUMBER)


async def send_sms(to_phone: str, message_body: str) -> tuple[bool, Optional[str]]:
    """
    Send SMS via Twilio

    Args:
        to_phone: Recipient phone number (should be in E.164 format)
        message_body: SMS message content

    Returns:
        Tuple of (success: bool, error_message: Optional[str])
    """
    if not to_phone:
        logger.debug("No phone number provided")
        return False, "No phone number provided"

    # Ensure phone number is in E.164 format
    if not to_phone.startswith("+"):
        logger.warning(f"Phone number not in E.164 format: {to_phone}")
        return False, "Phone number must be in E.164 format (e.g., +1234567890)"

    if not is_configured():
        if config.SMS_CONSOLE_FALLBACK:
            # Development mode: the message (and any code in it) only goes to the log
            logger.warning(f"📟 Twilio not configured, SMS to {to_phone}: {message_body}")
            return True, None
        logger.error("❌ Twilio credentials are not configured")
        return False, "SMS provider not configured"

    data = {
        "To": to_phone,
        "From": config.TWILIO_PHONE_NUMBER,
        "Body": message_body,
    }

    try:
        logger.info(f"🚀 Sending SMS to Twilio API for {to_phone}")
        async with httpx.AsyncClient() as client:
            response = await client.post(
                TWILIO_MESSAGES_URL.format(account_sid=config.TWILIO_ACCOUNT_SID),
                auth=(config.TWILIO_ACCOUNT_SID, config.TWILIO_AUTH_TOKEN),
                data=data,
                timeout=10.0,
            )

        logger.info(f"📡 Twilio API response status: {response.status_code}")

        if response.status_code in [200, 201]:
            message_sid = response.json().get("sid")
            logger.info(f"✅ SMS sent successfully to {to_phone} (SID: {message_sid})")
            return True, None

        error_data = response.json()
        error_message = error_data.get("message", "Unknown error")
        error_code = error_data.get("code")
        logger.error(f"❌ Twilio API error [{error_code}]: {error_message}")
        return False, error_message

    except httpx.HTTPError as e:
        logger.error(f"Twilio API error: {str(e)}")
        return False, str(e)
    except Exception as e:
        logger.error(f"Error sending SMS: {str(e)}")
        return False, str(e)


# SMS Template Functions
async def send_verification_code_sms(to_phone: str, code: str):
    """Send a one-time phone verification code"""
    message = f"Your CarePulse verification code is: {code}. It expires in 10 minutes."
    return await send_sms(to_phone=to_phone, message_body=message)


async def send_appointment_scheduled_sms(to_phone: str, doctor_name: str, schedule: str):
    """Send SMS when an appointment is confirmed"""
    message = (
        f"Greetings from CarePulse. Your appointment is confirmed for {schedule} "
        f"with Dr. {doctor_name}."
    )
    return await send_sms(to_phone=to_phone, message_body=message)


async def send_appointment_cancelled_sms(to_phone: str, schedule: str, reason: str):
    """Send SMS when an appointment is cancelled"""
    message = (
        f"Greetings from CarePulse. We regret to inform that your appointment for {schedule} "
        f"is cancelled. Reason: {reason}."
    )
    return await send_sms(to_phone=to_phone, message_body=message)
