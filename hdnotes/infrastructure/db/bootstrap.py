"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar colecciones mínimas y consistencia.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging

from pymongo.errors import PyMongoError

from hdnotes.infrastructure.db.mongo import get_db
from hdnotes.repositories.note_repo import COLLECTION as NOTE_COLL
from hdnotes.repositories.user_repo import COLLECTION as USER_COLL

_log = logging.getLogger("hdnotes.mongo.bootstrap")


USER_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["name", "email", "auth_provider", "is_verified", "created_at", "updated_at"],
    "properties": {
        "name": {"bsonType": "string", "minLength": 1},
        "email": {"bsonType": "string", "minLength": 3, "description": "lowercase"},
        "auth_provider": {"bsonType": "string", "enum": ["local", "google"]},
        "password_hash": {"bsonType": "string"},
        "date_of_birth": {"bsonType": "date"},
        "google_id": {"bsonType": "string"},
        "is_verified": {"bsonType": "bool"},
        "otp": {
            "bsonType": "object",
            "required": ["code", "expires_at"],
            "properties": {
                "code": {"bsonType": "string", "pattern": "^[0-9]{6}$"},
                "expires_at": {"bsonType": "date"},
            },
        },
        "created_at": {"bsonType": "string", "minLength": 10},
        "updated_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
    # Reglas condicionales según el proveedor de autenticación
    "allOf": [
        {
            "if": {"properties": {"auth_provider": {"const": "local"}}},
            "then": {"required": ["password_hash", "date_of_birth"]},
        },
        {
            "if": {"properties": {"auth_provider": {"const": "google"}}},
            "then": {"required": ["google_id"]},
        },
    ],
}

NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["title", "content", "user_id", "created_at", "updated_at"],
    "properties": {
        "title": {"bsonType": "string", "minLength": 1},
        "content": {"bsonType": "string", "minLength": 1},
        "user_id": {"bsonType": "objectId"},
        "created_at": {"bsonType": "string", "minLength": 10},
        "updated_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
}

USER_INDEXES: List[Dict[str, Any]] = [
    {"keys": [("email", 1)], "unique": True, "name": "uniq_email"},
    {"keys": [("google_id", 1)], "unique": True, "sparse": True, "name": "uniq_google_id"},
]

NOTE_INDEXES: List[Dict[str, Any]] = [
    {"keys": [("user_id", 1), ("created_at", -1)], "name": "ix_user_created"},
]


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if name not in db.list_collection_names():
            if validator:
                db.create_collection(name, validator={"$jsonSchema": validator})
            else:
                db.create_collection(name)
        elif validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # No aborta el arranque; solo deja sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        opts = dict(ix)
        keys = opts.pop("keys")
        try:
            coll.create_index(keys, **opts)
        except PyMongoError as e:
            _log.warning("No se pudo crear índice %s en '%s': %s", opts.get("name"), name, e)


def ensure_collections() -> None:
    """
    Garantiza colecciones, validadores e índices mínimos.
    """
    _collmod_or_create(USER_COLL, USER_VALIDATOR)
    _ensure_indexes(USER_COLL, USER_INDEXES)

    _collmod_or_create(NOTE_COLL, NOTE_VALIDATOR)
    _ensure_indexes(NOTE_COLL, NOTE_INDEXES)
    _log.info("Colecciones e índices verificados")
