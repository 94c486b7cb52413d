import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./console_auth.db")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    DEBUG_ERRORS = bool(data.get("DEBUG_ERRORS", False))
    EXPOSE_DEBUG_TOKENS = bool(data.get("EXPOSE_DEBUG_TOKENS", False))

    # Session cookie
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "sid")
    SESSION_TTL_HOURS = data.get("SESSION_TTL_HOURS", 24)
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", ENVIRONMENT == "production"))

    # Credentials and one-time secrets
    BCRYPT_ROUNDS = data.get("BCRYPT_ROUNDS", 12)
    TWO_FACTOR_CODE_TTL_MINUTES = data.get("TWO_FACTOR_CODE_TTL_MINUTES", 10)
    BACKUP_CODE_COUNT = data.get("BACKUP_CODE_COUNT", 10)
    RESET_TOKEN_TTL_HOURS = data.get("RESET_TOKEN_TTL_HOURS", 1)

    # Outbound email
    EMAIL_BACKEND = data.get("EMAIL_BACKEND", "console")
    EMAIL_FROM = data.get("EMAIL_FROM", "no-reply@localhost")
    EMAIL_TIMEOUT_SECONDS = data.get("EMAIL_TIMEOUT_SECONDS", 10)
    SENDGRID_API_KEY = data.get("SENDGRID_API_KEY", "")
    SENDGRID_API_URL = data.get("SENDGRID_API_URL", "https://api.sendgrid.com/v3/mail/send")
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:5000")
