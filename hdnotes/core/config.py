"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Mongo, Auth/JWT, OTP, Email, Rate limit, Google.
- Acepta los nombres de variables del despliegue anterior (MONGODB_URI, EMAIL_USER, ...).
"""
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Conjunto de variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    """
    # App
    app_name: str = "HD Notes API"
    api_prefix: str = "/api"
    environment: str = Field(
        "development",
        validation_alias=AliasChoices("ENVIRONMENT", "APP_ENV", "NODE_ENV"),
    )
    port: int = 5000
    log_level: str = "INFO"

    # CORS (frontend en localhost:3000 por defecto)
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    frontend_url: str | None = None

    # Mongo
    mongo_uri: str | None = Field(
        None,
        validation_alias=AliasChoices("MONGODB_URI", "MONGO_URI"),
    )
    mongo_db: str = "hd_notes"
    mongo_server_selection_timeout_ms: int = 15000
    # TLS relax options (dev only)
    mongo_tls_insecure: bool = False

    # Auth / JWT
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7
    password_min_length: int = 6

    # Verificación por código (OTP)
    otp_expire_minutes: int = 10

    # Email / SMTP (Gmail por defecto)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str | None = Field(None, validation_alias=AliasChoices("SMTP_USER", "EMAIL_USER"))
    smtp_pass: str | None = Field(None, validation_alias=AliasChoices("SMTP_PASS", "EMAIL_PASS"))
    smtp_from_email: str | None = None
    smtp_from_name: str = "HD Notes"
    smtp_use_tls: bool = True

    # Rate limit global por IP (ventana de 15 minutos)
    rate_limit_requests: int | None = None
    rate_limit_window_seconds: int = 15 * 60

    # Google OAuth (solo redirección; el callback no intercambia el código)
    google_client_id: str | None = None
    google_client_secret: str | None = None
    google_redirect_uri: str | None = None

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
        populate_by_name=True,
    )

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def is_production(self) -> bool:
        return (self.environment or "").strip().lower() == "production"

    @property
    def allowed_origins(self) -> list[str]:
        """Orígenes CORS permitidos: lista configurada + FRONTEND_URL (sin duplicados)."""
        origins = [o.rstrip("/") for o in self.cors_origins if o]
        if self.frontend_url and self.frontend_url.rstrip("/") not in origins:
            origins.append(self.frontend_url.rstrip("/"))
        return origins

    @property
    def effective_rate_limit(self) -> int:
        if self.rate_limit_requests is not None:
            return self.rate_limit_requests
        return 100 if self.is_production else 1000

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_pass)

    @property
    def google_configured(self) -> bool:
        return bool(self.google_client_id and self.google_redirect_uri)


settings = Settings()
