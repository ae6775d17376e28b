import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./ruraledu.db")

CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), ["http://localhost:3000"])

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", str(7 * 24 * 60)))

# "bearer" returns the token in the login body, "cookie" sets it as an HTTP-only cookie.
AUTH_TOKEN_TRANSPORT = os.getenv("AUTH_TOKEN_TRANSPORT", "bearer").strip().lower()
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session")
SESSION_COOKIE_SECURE = _get_bool(
    os.getenv("SESSION_COOKIE_SECURE"),
    default=APP_ENV.lower() == "production",
)

BCRYPT_ROUNDS = 10

TOKEN_TRANSPORTS = {"bearer", "cookie"}


def validate_runtime_config() -> None:
    if not JWT_SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY must be set.")
    if AUTH_TOKEN_TRANSPORT not in TOKEN_TRANSPORTS:
        raise RuntimeError(
            f"AUTH_TOKEN_TRANSPORT must be one of {sorted(TOKEN_TRANSPORTS)}, got {AUTH_TOKEN_TRANSPORT!r}."
        )
    if JWT_EXPIRES_MINUTES <= 0:
        raise RuntimeError("JWT_EXPIRES_MINUTES must be a positive number of minutes.")
