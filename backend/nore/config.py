"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    APP_NAME: str = "Nore"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ENVIRONMENT: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # TLS, used outside the local environment
    SSL_CERTFILE: str = ""
    SSL_KEYFILE: str = ""

    # Comma-separated
    CORS_ALLOWED_ORIGINS: str = "*"

    # Request validation
    VALIDATION_STRICT_TYPES: bool = True

    # Mail
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 25
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_STARTTLS: bool = False
    MAIL_FROM: str = ""
    MAIL_PRODUCT_NAME: str = "Nore"
    MAIL_PRODUCT_LINK: str = "http://localhost:3000"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def use_tls(self) -> bool:
        """TLS is used outside the local environment when a certificate is configured."""
        return self.ENVIRONMENT != "local" and bool(self.SSL_CERTFILE and self.SSL_KEYFILE)


@lru_cache
def get_settings() -> Settings:
    return Settings()
