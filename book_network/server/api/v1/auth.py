"""
Authentication Endpoints.

Registration, login, account activation and the password reset flows. These
endpoints are public; they never require a session token.
"""

from fastapi import APIRouter, status

from book_network.core.models.io import (
    AuthenticationRequest,
    AuthenticationResponse,
    ForgotPasswordRequest,
    MessageResponse,
    RegistrationRequest,
    ResetPasswordRequest,
    TokenRequest,
)
from book_network.server.services.deps import AuthServiceDep

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=MessageResponse,
    summary="Register",
    description="Create a disabled account and email its activation code.",
    responses={409: {"description": "Email already in use"}, 502: {"description": "Activation email not sent"}},
)
async def register(request: RegistrationRequest, auth: AuthServiceDep) -> MessageResponse:
    await auth.register(request.first_name, request.last_name, request.email, request.password)
    return MessageResponse(message="Registration accepted, check your email to activate your account")


@router.post(
    "/authenticate",
    response_model=AuthenticationResponse,
    summary="Authenticate",
    description="Exchange email and password for a signed session token.",
    responses={401: {"description": "Bad credentials, disabled or locked account"}},
)
async def authenticate(request: AuthenticationRequest, auth: AuthServiceDep) -> AuthenticationResponse:
    return await auth.authenticate(request.email, request.password)


@router.post(
    "/activate-account",
    response_model=MessageResponse,
    summary="Activate Account",
    description="Redeem an activation code. An expired code triggers a new activation email.",
    responses={400: {"description": "Code expired"}, 404: {"description": "Unknown code"}},
)
async def activate_account(request: TokenRequest, auth: AuthServiceDep) -> MessageResponse:
    await auth.activate_account(request.token)
    return MessageResponse(message="Account activated")


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    summary="Forgot Password",
    description="Email a password reset code to the account owner.",
    responses={404: {"description": "Unknown email"}},
)
async def forgot_password(request: ForgotPasswordRequest, auth: AuthServiceDep) -> MessageResponse:
    await auth.forgot_password(request.email)
    return MessageResponse(message="Password reset code sent")


@router.post(
    "/verify-reset-code",
    response_model=MessageResponse,
    summary="Verify Reset Code",
    description="Validate a password reset code before choosing a new password.",
    responses={400: {"description": "Code expired"}, 404: {"description": "Unknown code"}},
)
async def verify_reset_code(request: TokenRequest, auth: AuthServiceDep) -> MessageResponse:
    await auth.verify_reset_token(request.token)
    return MessageResponse(message="Code verified")


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    summary="Reset Password",
    description="Choose a new password with a verified reset code.",
    responses={400: {"description": "Mismatch, expired or unverified code"}, 404: {"description": "Unknown code"}},
)
async def reset_password(request: ResetPasswordRequest, auth: AuthServiceDep) -> MessageResponse:
    await auth.reset_password(request.token, request.new_password, request.confirm_password)
    return MessageResponse(message="Password updated")


@router.post(
    "/set-password",
    response_model=MessageResponse,
    summary="Set Password",
    description="Choose the first password of an account created by an administrator.",
    responses={400: {"description": "Mismatch or expired code"}, 404: {"description": "Unknown code"}},
)
async def set_password(request: ResetPasswordRequest, auth: AuthServiceDep) -> MessageResponse:
    await auth.set_password(request.token, request.new_password, request.confirm_password)
    return MessageResponse(message="Password set")
