import time

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from app.core.config import CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET
from app.core.logging_config import get_logger

logger = get_logger()

cloudinary.config(
    cloud_name=CLOUDINARY_CLOUD_NAME,
    api_key=CLOUDINARY_API_KEY,
    api_secret=CLOUDINARY_API_SECRET,
)

UPLOAD_ATTEMPTS = 3
BACKOFF_BASE = 1.0  # seconds


def upload_image(image_bytes: bytes, attempts: int = UPLOAD_ATTEMPTS, backoff_base: float = BACKOFF_BASE):
    """Upload a JPEG to Cloudinary, retrying with exponential backoff.

    Returns ``{"url", "public_id"}`` or None once every attempt has failed.
    """
    for attempt in range(1, attempts + 1):
        try:
            result = cloudinary.uploader.upload(
                image_bytes,
                folder="room_images",
                resource_type="image",
                format="jpg",          # force output as JPG
                quality="90"
            )
            return {
                "url": result.get("secure_url"),
                "public_id": result.get("public_id")
            }
        except CloudinaryError as e:
            logger.warning(f"Cloudinary upload attempt {attempt}/{attempts} failed: {e}")
            if attempt < attempts:
                time.sleep(backoff_base * (2 ** (attempt - 1)))

    logger.error("Cloudinary upload failed after retries")
    return None


def delete_image(public_id: str):
    try:
        cloudinary.uploader.destroy(public_id, invalidate=True)
        return True
    except CloudinaryError as e:
        logger.error(f"Cloudinary delete error: {e}")
        return False
