"""
Dependencias reutilizables para routers (FastAPI Depends).

- Autenticación: extrae y valida el Bearer token, devuelve el usuario actual
  (sin `password_hash` ni `otp`) y lo deja en `request.state.user`.
- Mantener esta capa delgada: sin lógica de negocio pesada.
"""
from typing import Any, Dict, Optional

from fastapi import Header, Request

from hdnotes.core.exceptions import MissingTokenError, UserNotFoundError
from hdnotes.repositories import user_repo as repo
from hdnotes.services.token_service import verify_token


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(request: Request, authorization: Optional[str] = Header(default=None)) -> Dict[str, Any]:
    token = _bearer(authorization)
    if not token:
        raise MissingTokenError()

    # InvalidTokenError (403) se propaga al handler global
    user_id = verify_token(token)

    u = repo.get_user_by_id(user_id, public=True)
    if not u:
        raise UserNotFoundError()

    request.state.user = u
    return u
