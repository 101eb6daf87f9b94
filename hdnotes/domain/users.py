"""
Variantes de creación de usuario (unión etiquetada por `auth_provider`).

- `LocalAccount`: registro con email + contraseña (hash) + fecha de nacimiento.
- `FederatedAccount`: cuenta aprovisionada por Google; sin contraseña.

Así la regla "contraseña requerida salvo cuenta externa" queda en el tipo y no
en campos opcionales mutuamente excluyentes.
"""
from datetime import date
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator


class _AccountBase(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return normalize_email(v)


class LocalAccount(_AccountBase):
    auth_provider: Literal["local"] = "local"
    password_hash: str = Field(min_length=1)
    date_of_birth: date


class FederatedAccount(_AccountBase):
    auth_provider: Literal["google"] = "google"
    google_id: str = Field(min_length=1)


NewAccount = Annotated[Union[LocalAccount, FederatedAccount], Field(discriminator="auth_provider")]


def normalize_email(email: str) -> str:
    return str(email).strip().lower()


def mask_email(email: str) -> str:
    """Versión apta para logs: 'ana@x.com' -> 'a***@x.com'."""
    local, sep, domain = str(email).partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"
