"""
Conexión única a MongoDB (pymongo) para todo el proceso.

- `init_mongo()` crea el cliente, valida con ping y memoriza cliente/bd.
- `get_db()` inicializa de forma lazy en el primer uso.
- Sin reintentos: si no hay URI o el servidor no responde, el error se propaga.
"""
import logging

import certifi
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from hdnotes.core.config import settings
from hdnotes.core.exceptions import DependencyError

_log = logging.getLogger("hdnotes.mongo")

_client: MongoClient | None = None
_db: Database | None = None


def _build_client(uri: str) -> MongoClient:
    kwargs = dict(serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms)
    if uri.startswith("mongodb+srv://"):
        # SRV ya implica TLS; proveemos CA bundle para robustez
        kwargs["tlsCAFile"] = certifi.where()
        if settings.mongo_tls_insecure:
            kwargs["tlsAllowInvalidCertificates"] = True
    return MongoClient(uri, **kwargs)


def init_mongo() -> Database:
    """
    Inicializa el cliente y valida conexión (ping).
    Idempotente: si ya hay conexión, devuelve la misma base.
    """
    global _client, _db
    if _db is not None:
        return _db

    uri = settings.mongo_uri
    if not uri:
        raise DependencyError("Database unavailable", detail="MONGODB_URI is not configured")

    client = _build_client(uri)
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        _log.error("Mongo no accesible: %s", e)
        raise DependencyError("Database unavailable", detail=str(e)) from e

    _client = client
    _db = client[settings.mongo_db]
    _log.info("Mongo conectado db=%s", settings.mongo_db)
    return _db


def get_db() -> Database:
    """
    Devuelve la referencia a la base de datos.
    Úsalo en repositorios/servicios, no en routers.
    """
    if _db is None:
        return init_mongo()
    return _db


def db_ready() -> bool:
    return _db is not None


def is_connected() -> bool:
    """Ping a la base memorizada; False si no hay conexión o no responde."""
    if _db is None:
        return False
    try:
        _db.command("ping")
        return True
    except PyMongoError as e:
        _log.warning("Ping a Mongo falló: %s", e)
        return False
