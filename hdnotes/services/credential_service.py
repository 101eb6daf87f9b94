"""
Credenciales y códigos OTP: hashing de contraseñas (argon2id), generación de
códigos de 6 dígitos y validación de código + expiración.
"""
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional
import hmac
import secrets

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError
from argon2.low_level import Type

from hdnotes.core.config import settings
from hdnotes.core.exceptions import ValidationError


ph = PasswordHasher(time_cost=2, memory_cost=51200, parallelism=2, hash_len=32, salt_len=16, type=Type.ID)


class OtpStatus(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def hash_password(password: str) -> str:
    if not isinstance(password, str) or not password:
        raise ValidationError("Password is required")
    return ph.hash(password)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password or not password_hash:
        return False
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHash):
        return False


def generate_otp() -> str:
    """Código uniforme en 100000–999999 (sin cero inicial)."""
    return str(100000 + secrets.randbelow(900000))


def otp_expiry(now: Optional[datetime] = None) -> datetime:
    return (now or _now_utc()) + timedelta(minutes=settings.otp_expire_minutes)


def new_otp(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Documento `otp` listo para guardar en el usuario."""
    return {"code": generate_otp(), "expires_at": otp_expiry(now)}


def _aware(dt: datetime) -> datetime:
    # pymongo devuelve datetimes naive en UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def check_otp(stored: Optional[Dict[str, Any]], submitted: str, now: Optional[datetime] = None) -> OtpStatus:
    """
    VALID solo si el código coincide exactamente y `now < expires_at`.
    Un código correcto pero vencido es EXPIRED; cualquier otro caso es INVALID.
    """
    if not stored or not stored.get("code") or submitted is None:
        return OtpStatus.INVALID
    if not hmac.compare_digest(str(stored["code"]).encode("utf-8"), str(submitted).encode("utf-8")):
        return OtpStatus.INVALID
    expires_at = stored.get("expires_at")
    if not isinstance(expires_at, datetime):
        return OtpStatus.INVALID
    if _aware(now or _now_utc()) >= _aware(expires_at):
        return OtpStatus.EXPIRED
    return OtpStatus.VALID
