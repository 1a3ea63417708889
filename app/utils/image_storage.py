"""
Image storage utilities for doctor profile pictures.
Handles image validation, upload to R2, view URL construction and deletion.
"""

import logging
import uuid
from typing import Optional, Tuple

import boto3
from botocore.client import Config

from .. import config

logger = logging.getLogger(__name__)

# Image validation constants
MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024  # 5MB
ALLOWED_IMAGE_TYPES = [
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "image/gif",
    "image/svg+xml",
]
ALLOWED_IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "webp", "gif", "svg")
DOCTOR_IMAGE_PREFIX = "doctors"


def get_r2_client():
    """Get configured boto3 client for Cloudflare R2"""
    return boto3.client(
        "s3",
        endpoint_url=f"https://{config.R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=config.R2_ACCESS_KEY_ID,
        aws_secret_access_key=config.R2_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
        region_name="auto",
    )


def validate_image_file(
    filename: Optional[str], size_bytes: int, mime_type: Optional[str]
) -> Tuple[bool, Optional[str]]:
    """
    Validate an image before upload.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if size_bytes > MAX_IMAGE_SIZE_BYTES:
        return False, (
            f"File size exceeds 5MB limit. Your file is {size_bytes / (1024 * 1024):.2f}MB."
        )

    if mime_type not in ALLOWED_IMAGE_TYPES:
        return False, "Invalid file type. Only PNG, JPEG, WebP, GIF, and SVG images are allowed."

    if filename:
        # Path traversal and dangerous characters
        for char in ["..", "/", "\\", "<", ">", ":", '"', "|", "?", "*"]:
            if char in filename:
                return False, f"Invalid filename - contains dangerous character '{char}'"
        ext = filename.lower().rsplit(".", 1)[-1] if "." in filename else ""
        if ext not in ALLOWED_IMAGE_EXTENSIONS:
            return False, "Invalid filename - must have a valid image extension"
        if len(filename) > 255:
            return False, "Filename too long - maximum 255 characters"

    return True, None


def generate_doctor_image_key(filename: Optional[str]) -> str:
    """
    Generate a unique R2 key for a doctor image.

    Format: doctors/{uuid}.{ext}
    """
    ext = filename.rsplit(".", 1)[-1].lower() if filename and "." in filename else "png"
    return f"{DOCTOR_IMAGE_PREFIX}/{uuid.uuid4()}.{ext}"


def build_image_url(key: str) -> str:
    """View URL for a stored object: {public base}/{bucket}/{key}"""
    return f"{config.R2_PUBLIC_URL.rstrip('/')}/{config.R2_BUCKET_NAME}/{key}"


def key_from_image_url(url: str) -> Optional[str]:
    """Recover the object key from a view URL built by build_image_url"""
    marker = f"/{config.R2_BUCKET_NAME}/"
    if marker not in url:
        return None
    key = url.split(marker, 1)[1]
    return key or None


def upload_image(file_content: bytes, key: str, mime_type: str) -> str:
    """
    Upload an image to R2 and return its view URL.

    Raises:
        botocore.exceptions.ClientError: If the upload fails
    """
    r2 = get_r2_client()

    put_object_params = {
        "Bucket": config.R2_BUCKET_NAME,
        "Key": key,
        "Body": file_content,
        "ContentType": mime_type,
    }
    if mime_type == "image/svg+xml":
        put_object_params["ContentDisposition"] = "inline"
        put_object_params["CacheControl"] = "public, max-age=31536000"  # 1 year cache

    r2.put_object(**put_object_params)
    logger.info(f"📤 Uploaded image to R2: {key}")
    return build_image_url(key)


def delete_image(key: str) -> None:
    """
    Delete an image from R2.

    Raises:
        botocore.exceptions.ClientError: If the delete fails
    """
    r2 = get_r2_client()
    r2.delete_object(Bucket=config.R2_BUCKET_NAME, Key=key)
    logger.info(f"🗑️ Deleted image from R2: {key}")
