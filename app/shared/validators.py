"""Shared validation utilities"""

import re
from datetime import date, datetime, time, timezone
from typing import Optional

E164_PHONE_PATTERN = re.compile(r"^\+\d{10,15}$")
VERIFICATION_CODE_PATTERN = re.compile(r"^\d{6}$")
CARD_NUMBER_PATTERN = re.compile(r"^[0-9\s]+$")
CARD_EXPIRY_PATTERN = re.compile(r"^(0[1-9]|1[0-2])/([0-9]{2})$")
CVV_PATTERN = re.compile(r"^[0-9]+$")
TIME_OF_DAY_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def validate_e164_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a phone number in E.164 format.

    Args:
        phone: Phone number string, e.g. +15551234567

    Returns:
        The stripped phone number

    Raises:
        ValueError: If phone number is not "+" followed by 10-15 digits
    """
    if phone is None:
        return phone

    phone = phone.strip()
    if not E164_PHONE_PATTERN.match(phone):
        raise ValueError("Invalid phone number")
    return phone


def validate_verification_code(code: str) -> str:
    """Validate a 6-digit numeric verification code"""
    code = code.strip()
    if len(code) != 6:
        raise ValueError("Verification code must be 6 digits")
    if not VERIFICATION_CODE_PATTERN.match(code):
        raise ValueError("Code must contain only digits")
    return code


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def parse_time_of_day(value: str) -> time:
    """Parse an "HH:MM" 24-hour string"""
    match = TIME_OF_DAY_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


def parse_availability_range(value: str, on_date: date) -> tuple[datetime, datetime]:
    """
    Convert an "HH:MM - HH:MM" availability string into two timestamps on one day.

    Args:
        value: Availability window, e.g. "09:00 - 17:00"
        on_date: The day both timestamps are anchored to

    Returns:
        Tuple of (start, end) datetimes

    Raises:
        ValueError: If the string is malformed or the window ends before it starts
    """
    parts = value.split(" - ")
    if len(parts) != 2:
        raise ValueError("Availability must look like 'HH:MM - HH:MM'")

    start = datetime.combine(on_date, parse_time_of_day(parts[0]))
    end = datetime.combine(on_date, parse_time_of_day(parts[1]))
    if end <= start:
        raise ValueError("Availability end time must be after start time")
    return start, end


def validate_card_number(card_number: str) -> str:
    """Shape check only: 13-19 characters of digits and spaces"""
    if len(card_number) < 13:
        raise ValueError("Card number must be at least 13 digits")
    if len(card_number) > 19:
        raise ValueError("Card number cannot exceed 19 digits")
    if not CARD_NUMBER_PATTERN.match(card_number):
        raise ValueError("Card number must contain only digits and spaces")
    return card_number


def validate_card_expiry(expiry: str) -> str:
    if not CARD_EXPIRY_PATTERN.match(expiry):
        raise ValueError("Please use MM/YY format")
    return expiry


def validate_cvv(cvv: str) -> str:
    if len(cvv) < 3:
        raise ValueError("CVV must be at least 3 digits")
    if len(cvv) > 4:
        raise ValueError("CVV cannot exceed 4 digits")
    if not CVV_PATTERN.match(cvv):
        raise ValueError("CVV must contain only digits")
    return cvv


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store timestamps as naive UTC, converting timezone-aware input"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
