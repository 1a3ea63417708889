import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./carepulse.db")

# Cloudflare R2 Configuration (doctor profile images)
R2_ACCOUNT_ID = os.getenv("R2_ACCOUNT_ID")
R2_ACCESS_KEY_ID = os.getenv("R2_ACCESS_KEY_ID")
R2_SECRET_ACCESS_KEY = os.getenv("R2_SECRET_ACCESS_KEY")
R2_BUCKET_NAME = os.getenv("R2_BUCKET_NAME", "carepulse")
# Public base URL the bucket is served from, e.g. https://files.carepulse.app
R2_PUBLIC_URL = os.getenv("R2_PUBLIC_URL", f"https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com")

# Twilio Configuration (phone verification + appointment notices)
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_PHONE_NUMBER = os.getenv("TWILIO_PHONE_NUMBER")
# Development only: log SMS bodies instead of sending when Twilio is not configured
SMS_CONSOLE_FALLBACK = os.getenv("SMS_CONSOLE_FALLBACK", "false").lower() == "true"
APPOINTMENT_SMS_NOTIFICATIONS = (
    os.getenv("APPOINTMENT_SMS_NOTIFICATIONS", "false").lower() == "true"
)

# Admin dashboard passkey - CRITICAL: No default passkey in production
ADMIN_PASSKEY = os.getenv("ADMIN_PASSKEY")
if not ADMIN_PASSKEY:
    import warnings

    warnings.warn(
        "ADMIN_PASSKEY not set! Using insecure default - DO NOT USE IN PRODUCTION",
        RuntimeWarning,
        stacklevel=2,
    )
    ADMIN_PASSKEY = "111111"  # noqa: S105 - Dev fallback only

# Simulated payment processing
PAYMENT_PROCESSING_DELAY_SECONDS = float(os.getenv("PAYMENT_PROCESSING_DELAY_SECONDS", "1.5"))
DEFAULT_DOCTOR_RATE = float(os.getenv("DEFAULT_DOCTOR_RATE", "50"))

# Frontend base URL (CORS)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
