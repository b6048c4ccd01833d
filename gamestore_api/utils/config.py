import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)) or default)
    except ValueError:
        return default


ALGORITHM = "HS256"
ACCESS_TOKEN_HOURS = _env_int("ACCESS_TOKEN_HOURS", 24)
AUTH_COOKIE_NAME = "auth_token"
COOKIE_SECURE = _env_bool("COOKIE_SECURE", False)
AUTO_CREATE_TABLES = _env_bool("AUTO_CREATE_TABLES", True)
QUERY_LIMIT = _env_int("QUERY_LIMIT", 50)
LOG_LEVEL = (os.getenv("LOG_LEVEL", "INFO") or "INFO").upper()
