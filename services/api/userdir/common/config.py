import os
import typing as t

from userdir.common.exceptions import ConfigurationError


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value else None


def normalize_db_url(url: str | None) -> str | None:
    '''libpq-style URLs (postgres://, postgresql://) are mapped onto the asyncpg driver'''
    if not url:
        return None
    for prefix in ('postgres://', 'postgresql://'):
        if url.startswith(prefix):
            return 'postgresql+asyncpg://' + url[len(prefix):]
    return url


class Config():
    #Basic app settings
    APP_NAME = 'userdir'
    UVICORN_PORT = int(os.getenv("PORT", "8080"))
    UVICORN_HOST = '0.0.0.0'
    GIT_COMMIT = os.getenv("GIT_COMMIT", "[commit hash unknown]")
    MODE = os.getenv("MODE", "Local build")
    JSON_LOGS = int(os.getenv("JSON_LOGS", "0"))

    #Security settings
    JWT_SECRET = os.getenv("JWT_SIGNING_SECRET_KEY")
    ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = _optional_int("ACCESS_TOKEN_EXPIRE_MINUTES") #None => tokens never expire
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "14"))

    #PostgreSQL
    DB_URL = normalize_db_url(os.getenv("DB_CONNECTION_STRING"))

    #DB Common
    DB_WAIT_INTERVAL_SECONDS = 10  #seconds
    DB_WAIT_MAX_RETRIES = 10
    DB_KWARGS = {
        'echo': False,
    }

    #Telemetry
    OTEL_ENABLED = int(os.getenv("OTEL_ENABLED", "0"))
    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", APP_NAME)
    OTEL_GRPC_ENDPOINT = os.getenv("OTEL_GRPC_ENDPOINT", "http://otel-collector:4317")

    #Attribute name => env variable it is read from
    REQUIRED: t.ClassVar[dict[str, str]] = {
        'DB_URL': 'DB_CONNECTION_STRING',
        'JWT_SECRET': 'JWT_SIGNING_SECRET_KEY',
    }

    @classmethod
    def ensure_required(cls) -> None:
        """Fails startup when any of the mandatory settings is missing"""
        missing = [env for attr, env in cls.REQUIRED.items() if not getattr(cls, attr)]
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
