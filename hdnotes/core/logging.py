"""
Logging de la API: loggers `hdnotes.*` (auth, email, mongo, request, errors)
alineados con los de Uvicorn.

Los emails nunca se registran completos; ver `domain.users.mask_email`.
"""
import logging

APP_LOGGER = "hdnotes"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
# pymongo emite eventos de comandos y topología en DEBUG
QUIET_LOGGERS = ("pymongo",)


def resolve_level(level: str | None) -> int:
    value = logging.getLevelName((level or "INFO").upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str | None = "INFO") -> None:
    app_level = resolve_level(level)
    logging.basicConfig(
        level=app_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    for name in (APP_LOGGER, *UVICORN_LOGGERS):
        logging.getLogger(name).setLevel(app_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(app_level, logging.WARNING))
