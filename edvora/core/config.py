import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


APP_ENV = os.getenv("APP_ENV", "development")
APP_NAME = os.getenv("APP_NAME", "Edvora Student Platform API")
APP_VERSION = "2.0"

# Unset means the in-memory demo backend.
DATABASE_URL = os.getenv("DATABASE_URL") or None
DATABASE_ECHO = _get_bool(os.getenv("DATABASE_ECHO"), default=False)

DEV_JWT_SECRET_KEY = "dev-secret"
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", DEV_JWT_SECRET_KEY)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", str(7 * 24 * 60)))

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), ["http://localhost:3000"])

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_DEPARTMENT = os.getenv("DEFAULT_DEPARTMENT", "Computer Science")
MIN_PASSWORD_LENGTH = 6


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == DEV_JWT_SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
