"""
Lógica de autenticación: inicio de registro (OTP), verificación, login y perfil.
"""
from datetime import date, datetime
from typing import Any, Dict, Optional
import logging

from hdnotes.core.config import settings
from hdnotes.core.exceptions import ConflictError, EmailDeliveryError, ValidationError
from hdnotes.domain.users import LocalAccount, mask_email, normalize_email
from hdnotes.infrastructure.email import email_client
from hdnotes.repositories import user_repo as repo
from hdnotes.services import credential_service as credentials
from hdnotes.services import token_service
from hdnotes.services.credential_service import OtpStatus

_log = logging.getLogger("hdnotes.auth")

INVALID_CREDENTIALS = "Invalid credentials"


def _parse_dob(value: str) -> date:
    """Acepta YYYY-MM-DD o un datetime ISO completo (p. ej. 2000-01-01T00:00:00.000Z)."""
    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError as e:
        raise ValidationError("Invalid date of birth", detail=str(e)) from e


def user_summary(user: Dict[str, Any]) -> Dict[str, Any]:
    """Vista pública del usuario: id, nombre, email, fecha de nacimiento y verificación."""
    dob = user.get("date_of_birth")
    if isinstance(dob, datetime):
        dob = dob.date().isoformat()
    return {
        "id": str(user["_id"]),
        "name": user.get("name"),
        "email": user.get("email"),
        "dateOfBirth": dob,
        "isVerified": bool(user.get("is_verified")),
    }


def start_signup(*, email: Optional[str], name: Optional[str], date_of_birth: Optional[str], password: Optional[str]) -> Dict[str, Any]:
    """
    Registra (o re-registra) un usuario sin verificar y envía el OTP por correo.

    - Si existe un usuario verificado con el mismo email -> ConflictError.
    - Si existe uno sin verificar, se sobreescriben perfil, hash y OTP.
    """
    if not email or not (name or "").strip() or not date_of_birth or not password:
        raise ValidationError("All fields are required")
    if len(password) < settings.password_min_length:
        raise ValidationError(f"Password must be at least {settings.password_min_length} characters")

    email = normalize_email(email)
    dob = _parse_dob(date_of_birth)

    existing = repo.find_user_by_email(email)
    if existing and existing.get("is_verified"):
        raise ConflictError("User already exists with this email")

    account = LocalAccount(
        name=name,
        email=email,
        password_hash=credentials.hash_password(password),
        date_of_birth=dob,
    )
    otp = credentials.new_otp()

    if existing:
        repo.save_user(
            existing["_id"],
            {
                "auth_provider": account.auth_provider,
                "name": account.name,
                "date_of_birth": repo.dob_to_datetime(account.date_of_birth),
                "password_hash": account.password_hash,
                "otp": otp,
            },
        )
        _log.info("Usuario sin verificar actualizado con nuevo OTP user_id=%s", existing["_id"])
    else:
        user_id = repo.insert_user(account, otp=otp)
        _log.info("Usuario creado con OTP user_id=%s", user_id)

    try:
        email_client.send_verification_code_email(email, otp["code"], account.name)
    except EmailDeliveryError as e:
        # El usuario queda pendiente; reenviar el formulario genera un OTP nuevo
        raise EmailDeliveryError("Failed to send OTP", detail=e.detail) from e
    return {"message": "OTP sent successfully"}


def complete_signup(*, email: Optional[str], code: Optional[str]) -> Dict[str, Any]:
    """
    Verificación por código (OTP): marca el usuario como verificado y emite token.
    """
    if not email or not code:
        raise ValidationError("Email and OTP are required")

    user = repo.find_user_by_email(email)
    if not user:
        raise ValidationError("User not found")

    status = credentials.check_otp(user.get("otp"), code.strip())
    if status is OtpStatus.INVALID:
        raise ValidationError("Invalid OTP")
    if status is OtpStatus.EXPIRED:
        raise ValidationError("OTP has expired")

    repo.mark_verified(user["_id"])
    user["is_verified"] = True
    user.pop("otp", None)
    _log.info("Registro completado user_id=%s", user["_id"])

    return {
        "message": "Account created successfully",
        "token": token_service.issue_token(str(user["_id"])),
        "user": user_summary(user),
    }


def sign_in(*, email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
    """
    Login local. Usuario inexistente, sin verificar, sin contraseña (cuenta
    federada) o contraseña incorrecta responden el mismo mensaje.
    """
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = repo.find_user_by_email(email)
    if not user or not user.get("is_verified"):
        raise ValidationError(INVALID_CREDENTIALS)
    if not credentials.verify_password(password, user.get("password_hash")):
        raise ValidationError(INVALID_CREDENTIALS)

    _log.info("Login correcto user_id=%s", user["_id"])
    return {
        "message": "Sign in successful",
        "token": token_service.issue_token(str(user["_id"])),
        "user": user_summary(user),
    }
