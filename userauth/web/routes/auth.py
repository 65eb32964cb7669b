"""
Authentication routes for user management.

Provides endpoints for:
- Registration
- Login/Logout
- Email verification
"""

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from userauth.auth.service import AuthContext, AuthService
from userauth.web.dependencies import authorize, get_auth_service
from userauth.web.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
    message_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", status_code=201, response_model=RegisterResponse)
async def register(body: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """
    Register a new user account.

    The account starts unverified; a verification link is emailed.
    """
    gender = body.gender.value if body.gender else None
    user = await service.register(body.email, body.password, gender)
    return JSONResponse({"user": user.public_profile()}, status_code=201)


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """
    Login with email and password.

    Returns a session token; any earlier token of the user stops working.
    """
    result = await service.login(body.email, body.password)
    return JSONResponse(result.to_response())


@router.post("/logout", status_code=204)
async def logout(
    context: AuthContext = Depends(authorize),
    service: AuthService = Depends(get_auth_service),
):
    """Logout by clearing the stored session token."""
    await service.logout(context)
    return Response(status_code=204)


@router.get("/verify/{verification_token}", response_class=PlainTextResponse)
async def verify(verification_token: str, service: AuthService = Depends(get_auth_service)):
    """Consume an email verification token."""
    await service.verify_email(verification_token)
    return PlainTextResponse("Verification successful!")


@router.post("/verify", response_model=MessageResponse)
async def resend_verification(
    body: ResendVerificationRequest, service: AuthService = Depends(get_auth_service)
):
    """
    Resend the verification email to a still unverified user.

    Answers 503 when the email provider did not take the message.
    """
    await service.resend_verification(body.email)
    return JSONResponse(message_response("Verification email sent"))
