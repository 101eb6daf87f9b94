"""Rutas de autenticación: registro con OTP, login, perfil y redirección a Google."""
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from hdnotes.api.deps import get_current_user
from hdnotes.api.schemas.auth import (
    AuthOut,
    MessageOut,
    ProfileOut,
    SendOtpPayload,
    SigninPayload,
    SignupPayload,
)
from hdnotes.core.config import settings
from hdnotes.core.exceptions import DependencyError, NotImplementedFlowError
from hdnotes.services import auth_service as service

router = APIRouter(prefix="/auth", tags=["Auth"])

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"


@router.post(
    "/send-otp",
    response_model=MessageOut,
    summary="Iniciar registro",
    description="Crea o actualiza el usuario sin verificar y envía un OTP por correo.",
)
def send_otp(payload: SendOtpPayload):
    return service.start_signup(
        email=payload.email,
        name=payload.name,
        date_of_birth=payload.dateOfBirth,
        password=payload.password,
    )


@router.post(
    "/signup",
    response_model=AuthOut,
    status_code=status.HTTP_201_CREATED,
    summary="Verificar OTP y completar registro",
)
def signup(payload: SignupPayload):
    return service.complete_signup(email=payload.email, code=payload.otp)


@router.post("/signin", response_model=AuthOut, summary="Login con email y contraseña")
def signin(payload: SigninPayload):
    return service.sign_in(email=payload.email, password=payload.password)


@router.get("/profile", response_model=ProfileOut, summary="Perfil básico del usuario")
def profile(user=Depends(get_current_user)):
    return {"user": service.user_summary(user)}


@router.get("/google", summary="Redirección al consentimiento de Google")
def google_login():
    if not settings.google_configured:
        raise DependencyError("Google sign-in is not configured")
    query = urlencode({
        "client_id": settings.google_client_id,
        "redirect_uri": settings.google_redirect_uri,
        "scope": "email profile",
        "response_type": "code",
    })
    return RedirectResponse(f"{GOOGLE_AUTH_URL}?{query}")


@router.get("/google/callback", summary="Callback de Google (no implementado)")
def google_callback():
    # El intercambio de código por tokens no forma parte del servicio
    raise NotImplementedFlowError("Google sign-in is not implemented")
