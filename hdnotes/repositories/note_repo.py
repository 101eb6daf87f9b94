"""Repo de la colección `note`. Toda operación va acotada por `{_id, user_id}`."""
from typing import Any, Dict, List, Optional, Union
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument

from hdnotes.infrastructure.db.mongo import get_db

COLLECTION = "note"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _oid(value: Union[str, ObjectId]) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    if value and ObjectId.is_valid(str(value)):
        return ObjectId(str(value))
    return None


def list_notes(user_id: Union[str, ObjectId]) -> List[Dict[str, Any]]:
    """Notas del usuario, más recientes primero (desempate por _id)."""
    owner = _oid(user_id)
    if owner is None:
        return []
    cursor = get_db()[COLLECTION].find({"user_id": owner}).sort(
        [("created_at", DESCENDING), ("_id", DESCENDING)]
    )
    return list(cursor)


def insert_note(user_id: Union[str, ObjectId], title: str, content: str) -> Dict[str, Any]:
    """Inserta nota y devuelve el documento guardado."""
    now = _now_iso()
    data = {
        "title": title,
        "content": content,
        "user_id": _oid(user_id),
        "created_at": now,
        "updated_at": now,
    }
    res = get_db()[COLLECTION].insert_one(data)
    data["_id"] = res.inserted_id
    return data


def update_note(
    note_id: Union[str, ObjectId], user_id: Union[str, ObjectId], title: str, content: str
) -> Optional[Dict[str, Any]]:
    """Actualiza título/contenido; None si la nota no existe o no es del usuario."""
    nid, owner = _oid(note_id), _oid(user_id)
    if nid is None or owner is None:
        return None
    return get_db()[COLLECTION].find_one_and_update(
        {"_id": nid, "user_id": owner},
        {"$set": {"title": title, "content": content, "updated_at": _now_iso()}},
        return_document=ReturnDocument.AFTER,
    )


def delete_note(note_id: Union[str, ObjectId], user_id: Union[str, ObjectId]) -> bool:
    nid, owner = _oid(note_id), _oid(user_id)
    if nid is None or owner is None:
        return False
    res = get_db()[COLLECTION].delete_one({"_id": nid, "user_id": owner})
    return res.deleted_count == 1
