"""
Authentication Router
Endpoints for registration, email confirmation, login and logout.
"""

import logging

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import CurrentUser, get_credential_store, get_current_user
from app.exceptions import EmailNotConfirmedError, InvalidCredentialsError
from app.schemas.common import MessageResponse
from app.schemas.user import LoginRequest, RegisterRequest, TokenResponse
from app.services import auth_service, confirmation_service
from app.services.credential_store import CredentialStore
from app.services.email_service import EmailService, get_email_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=MessageResponse)
async def register(
    data: RegisterRequest,
    store: CredentialStore = Depends(get_credential_store),
    mailer: EmailService = Depends(get_email_service),
):
    """
    Create an unconfirmed account and email a confirmation link.
    The account is kept even if the email cannot be delivered.
    """
    user = await store.create(data.email, data.full_name, data.password)

    token = confirmation_service.issue_confirmation_token(user)
    await mailer.send_confirmation_email(user.email, user.id, token)

    return {"message": "Registration successful. Please check your email to confirm your account."}


@router.get("/confirm-email", response_model=MessageResponse)
async def confirm_email(
    user_id: str = Query(..., alias="userId"),
    token: str = Query(..., min_length=1),
    store: CredentialStore = Depends(get_credential_store),
):
    """Redeem the link sent at registration."""
    await confirmation_service.confirm(store, user_id, token)
    return {"message": "Email confirmed. You can now log in."}


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
):
    """
    Authenticate and return a signed session token.
    Unknown email and wrong password produce the same error.
    """
    user = await store.find_by_email(login_data.email)
    if user is None:
        logger.info("Login failed: unknown email")
        raise InvalidCredentialsError()

    if not user.email_confirmed:
        logger.info(f"Login refused for unconfirmed user {user.id}")
        raise EmailNotConfirmedError()

    if not store.verify_password(user, login_data.password):
        logger.info(f"Login failed: wrong password for user {user.id}")
        raise InvalidCredentialsError()

    roles = await store.get_roles(user)
    return {"token": auth_service.create_access_token(user, roles)}


@router.post("/logout", response_model=MessageResponse)
async def logout(user: CurrentUser = Depends(get_current_user)):
    """
    Tokens are stateless, so there is nothing to clear server-side.
    Clients discard the token.
    """
    return {"message": "Logout successful"}
