"""
Repositorio para la colección `user`.
"""
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Optional, Union

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from hdnotes.core.exceptions import ConflictError
from hdnotes.domain.users import FederatedAccount, LocalAccount, normalize_email
from hdnotes.infrastructure.db.mongo import get_db

COLLECTION = "user"

# Campos que nunca salen del repositorio cuando se pide la vista pública
PRIVATE_PROJECTION = {"password_hash": 0, "otp": 0}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _oid(user_id: Union[str, ObjectId]) -> Optional[ObjectId]:
    if isinstance(user_id, ObjectId):
        return user_id
    if user_id and ObjectId.is_valid(str(user_id)):
        return ObjectId(str(user_id))
    return None


def dob_to_datetime(d: date) -> datetime:
    """BSON no tiene tipo fecha; se guarda como medianoche UTC."""
    return datetime.combine(d, time.min, tzinfo=timezone.utc)


def find_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    """Busca usuario por email (normalizado a minúsculas)."""
    return get_db()[COLLECTION].find_one({"email": normalize_email(email)})


def get_user_by_id(user_id: Union[str, ObjectId], public: bool = False) -> Optional[Dict[str, Any]]:
    """Obtiene usuario por id; None si el id no existe o no es un ObjectId válido."""
    oid = _oid(user_id)
    if oid is None:
        return None
    projection = PRIVATE_PROJECTION if public else None
    return get_db()[COLLECTION].find_one({"_id": oid}, projection)


def insert_user(account: Union[LocalAccount, FederatedAccount], otp: Optional[Dict[str, Any]] = None) -> str:
    """
    Inserta un usuario a partir de una variante de creación y retorna el id (str).
    - `is_verified` arranca en False.
    - Sella `created_at` y `updated_at` en ISO-8601 UTC.
    - Email duplicado (índice único) -> ConflictError.
    """
    data: Dict[str, Any] = account.model_dump()
    if isinstance(account, LocalAccount):
        data["date_of_birth"] = dob_to_datetime(account.date_of_birth)

    data["is_verified"] = False
    if otp:
        data["otp"] = otp

    now = _now_iso()
    data["created_at"] = now
    data["updated_at"] = now

    try:
        res = get_db()[COLLECTION].insert_one(data)
    except DuplicateKeyError as e:
        raise ConflictError(detail=str(e)) from e
    return str(res.inserted_id)


def save_user(user_id: Union[str, ObjectId], fields: Dict[str, Any]) -> None:
    """Actualiza (`$set`) campos de un usuario existente y refresca `updated_at`."""
    data = dict(fields)
    data["updated_at"] = _now_iso()
    get_db()[COLLECTION].update_one({"_id": _oid(user_id)}, {"$set": data})


def mark_verified(user_id: Union[str, ObjectId]) -> None:
    """Marca el email como verificado y elimina el OTP pendiente."""
    get_db()[COLLECTION].update_one(
        {"_id": _oid(user_id)},
        {"$set": {"is_verified": True, "updated_at": _now_iso()}, "$unset": {"otp": ""}},
    )
