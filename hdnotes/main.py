"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
import logging

from fastapi import FastAPI

from hdnotes.api.router import api_router
from hdnotes.core.config import settings
from hdnotes.core.exceptions import register_exception_handlers
from hdnotes.core.logging import setup_logging
from hdnotes.core.middleware import add_middlewares
from hdnotes.infrastructure.db.bootstrap import ensure_collections
from hdnotes.infrastructure.db.mongo import init_mongo

_log = logging.getLogger("hdnotes.startup")

setup_logging(settings.log_level)
app = FastAPI(title=settings.app_name)

add_middlewares(app)
register_exception_handlers(app)


# Startup
@app.on_event("startup")
def on_startup():
    # Sin persistencia no se sirve: un fallo de conexión aborta el arranque
    init_mongo()
    ensure_collections()
    _log.info("Servidor listo environment=%s port=%s", settings.environment, settings.port)


# Monta routers bajo el prefijo configurado
app.include_router(api_router, prefix=settings.api_prefix_normalized)


def run() -> None:
    import uvicorn

    uvicorn.run("hdnotes.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
