"""Server bootstrap — serves the application over TLS or plain HTTP."""

import uvicorn
import structlog

from nore.config import Settings, get_settings

logger = structlog.get_logger()


def server_options(settings: Settings) -> dict:
    """uvicorn options for the configured environment."""
    options = {
        "host": settings.HOST,
        "port": settings.PORT,
        "log_level": settings.LOG_LEVEL.lower(),
    }
    if settings.use_tls:
        options["ssl_certfile"] = settings.SSL_CERTFILE
        options["ssl_keyfile"] = settings.SSL_KEYFILE
    elif settings.ENVIRONMENT != "local":
        logger.warning("tls_not_configured", environment=settings.ENVIRONMENT)
    return options


def run() -> None:
    """Start the server."""
    settings = get_settings()
    options = server_options(settings)

    logger.info(
        "server_starting",
        environment=settings.ENVIRONMENT,
        port=settings.PORT,
        tls="ssl_certfile" in options,
    )
    uvicorn.run("nore.main:app", **options)


if __name__ == "__main__":
    run()
