import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(key, default=False):
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    # Security
    SECRET_KEY = os.getenv("SECRET_KEY", "dev_secret_key_change_in_production")
    SESSION_COOKIE_SECURE = _env_bool("SESSION_COOKIE_SECURE", False)
    WTF_CSRF_ENABLED = _env_bool("WTF_CSRF_ENABLED", True)

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///vfire.db")
    CREATE_TABLES = _env_bool("CREATE_TABLES", False)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON = _env_bool("LOG_JSON", True)

    # Rate limiting
    RATELIMIT_ENABLED = _env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    LOGIN_RATE_LIMIT = os.getenv("LOGIN_RATE_LIMIT", "20 per minute")
    SIGNUP_RATE_LIMIT = os.getenv("SIGNUP_RATE_LIMIT", "5 per minute")

    # Password policy
    MIN_SIGNUP_PASSWORD_LENGTH = 6
    MIN_CHANGED_PASSWORD_LENGTH = 8

    def as_flask_config(self):
        """Uppercase attributes as a dict for ``app.config.from_mapping``."""
        return {k: getattr(self, k) for k in dir(self) if k.isupper()}


config = Config()
