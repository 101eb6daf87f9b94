"""
Creación y verificación de JWTs de acceso (HS256, 7 días, sin revocación).
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

# Asegura que usamos PyJWT (no el paquete "jwt" incorrecto)
try:
    import jwt as pyjwt  # PyJWT expone jwt.encode/jwt.decode
    if not hasattr(pyjwt, "encode"):
        raise ImportError("Paquete 'jwt' incorrecto en el entorno")
except ImportError as e:
    raise RuntimeError(
        "Conflicto de librerías JWT: instala PyJWT>=2 y desinstala el paquete 'jwt'. "
        "Ejecuta: pip uninstall jwt && pip install PyJWT"
    ) from e

from hdnotes.core.config import settings
from hdnotes.core.exceptions import DependencyError, InvalidTokenError


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _secret() -> str:
    if not settings.jwt_secret:
        raise DependencyError(detail="JWT_SECRET is not configured")
    return settings.jwt_secret


def issue_token(user_id: str, now: Optional[datetime] = None) -> str:
    """
    Genera un JWT válido por TOKEN_EXPIRE_DAYS.
    Claims: sub(user_id), iat, exp, jti.
    """
    issued = now or _now_utc()
    exp = issued + timedelta(days=settings.token_expire_days)
    payload = {
        "sub": str(user_id),
        "iat": int(issued.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": str(uuid4()),
    }
    return pyjwt.encode(payload, _secret(), algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> str:
    """
    Valida firma/expiración y devuelve el user_id (`sub`).
    Cualquier fallo -> InvalidTokenError.
    """
    secret = _secret()
    try:
        payload = pyjwt.decode(
            token,
            key=secret,
            algorithms=[settings.jwt_algorithm],
            leeway=0,
            options={"require": ["exp", "sub"]},
        )
    except pyjwt.PyJWTError as e:
        raise InvalidTokenError(detail=str(e)) from e
    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError(detail="missing subject")
    return str(user_id)
