"""
Profile Router
The caller's own profile: read, update (multipart, with picture upload)
and password change.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import TypeAdapter, EmailStr
from pydantic import ValidationError as PydanticValidationError

from app.api.dependencies import get_credential_store, get_current_account
from app.exceptions import ValidationError
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import ChangePasswordRequest, ProfileResponse
from app.services import confirmation_service, storage_service
from app.services.credential_store import CredentialStore
from app.services.email_service import EmailService, get_email_service

logger = logging.getLogger(__name__)

router = APIRouter()

_email_adapter = TypeAdapter(EmailStr)


@router.get("", response_model=ProfileResponse)
async def get_profile(user: User = Depends(get_current_account)):
    return ProfileResponse.from_user(user)


@router.put("", response_model=MessageResponse)
async def update_profile(
    full_name: Optional[str] = Form(None, alias="fullName", min_length=3, max_length=100),
    email: Optional[str] = Form(None),
    profile_picture: Optional[UploadFile] = File(None, alias="profilePicture"),
    user: User = Depends(get_current_account),
    store: CredentialStore = Depends(get_credential_store),
    mailer: EmailService = Depends(get_email_service),
):
    """
    Update name, email and picture. A new email address must be
    confirmed again before the next login.
    """
    if email:
        try:
            email = _email_adapter.validate_python(email)
        except PydanticValidationError as e:
            raise ValidationError("Profile update failed", errors={"email": ["Invalid email address"]}) from e

    picture_path = None
    if profile_picture is not None and profile_picture.filename:
        picture_path = await storage_service.save_profile_picture(profile_picture)

    try:
        email_changed = await store.update_profile(
            user, full_name=full_name, email=email, profile_picture=picture_path
        )
    except Exception:
        if picture_path:
            storage_service.delete_profile_picture(picture_path)
        raise

    if email_changed:
        logger.info(f"User {user.id} changed email; confirmation required")
        token = confirmation_service.issue_confirmation_token(user)
        await mailer.send_confirmation_email(user.email, user.id, token)

    return {"message": "Profile updated successfully"}


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    user: User = Depends(get_current_account),
    store: CredentialStore = Depends(get_credential_store),
):
    await store.update_password(user, data.current_password, data.new_password)
    return {"message": "Password changed successfully"}
