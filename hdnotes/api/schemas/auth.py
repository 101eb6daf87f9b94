"""
Esquemas Pydantic para operaciones de autenticación.

- Campos opcionales a propósito: la falta de campos se reporta con mensajes
  propios del servicio (400), no con el error genérico de validación.
- `email` se valida con EmailStr cuando viene presente.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr


class SendOtpPayload(BaseModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    dateOfBirth: Optional[str] = None
    password: Optional[str] = None


class SignupPayload(BaseModel):
    email: Optional[EmailStr] = None
    otp: Optional[str] = None


class SigninPayload(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None


# === Response models ===

class UserOut(BaseModel):
    """Respuesta pública de usuario (sin secretos)."""
    id: str
    name: str
    email: str
    dateOfBirth: Optional[str] = None
    isVerified: bool


class MessageOut(BaseModel):
    message: str


class AuthOut(BaseModel):
    message: str
    token: str
    user: UserOut


class ProfileOut(BaseModel):
    user: UserOut
