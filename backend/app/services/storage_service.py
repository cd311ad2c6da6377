"""
Upload Storage Service
Validates and stores profile pictures under the upload directory.
"""

import io
import logging
import uuid
from pathlib import Path

from fastapi import UploadFile
from PIL import Image as PILImage, UnidentifiedImageError

from app.config import settings
from app.exceptions import TransportError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}
PROFILE_PICTURES = "profile-pictures"
UPLOADS_URL_PREFIX = "/uploads"


def _reject(message: str) -> ValidationError:
    return ValidationError(message, errors={"profile_picture": [message]})


async def save_profile_picture(upload: UploadFile) -> str:
    """
    Store an uploaded profile picture and return its public path.
    The stored name is random; only the extension is kept.
    """
    extension = Path(upload.filename or "").suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise _reject("Invalid file type. Only JPG, JPEG, PNG, and GIF are allowed.")

    # Read one byte past the limit so oversize uploads are detected without buffering them
    data = await upload.read(settings.max_upload_bytes + 1)
    if not data:
        raise _reject("No file uploaded")
    if len(data) > settings.max_upload_bytes:
        raise _reject(f"File size cannot exceed {settings.max_upload_bytes // (1024 * 1024)}MB")

    try:
        with PILImage.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise _reject("File is not a valid image") from e

    folder = Path(settings.upload_dir) / PROFILE_PICTURES
    filename = f"{uuid.uuid4()}{extension}"
    try:
        folder.mkdir(parents=True, exist_ok=True)
        (folder / filename).write_bytes(data)
    except OSError as e:
        logger.error(f"Error saving profile picture: {e}")
        raise TransportError("An error occurred while saving the file") from e

    return f"{UPLOADS_URL_PREFIX}/{PROFILE_PICTURES}/{filename}"


def delete_profile_picture(public_path: str) -> None:
    """Remove a stored profile picture given the path returned by save_profile_picture."""
    prefix = f"{UPLOADS_URL_PREFIX}/{PROFILE_PICTURES}/"
    if not public_path.startswith(prefix):
        return
    name = Path(public_path[len(prefix):]).name
    try:
        (Path(settings.upload_dir) / PROFILE_PICTURES / name).unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"Error removing profile picture {name}: {e}")
