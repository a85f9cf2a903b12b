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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./rent.db")
    API_TITLE = data.get("API_TITLE", "Rent Ledger API")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Rent charge generation
    NEXT_PAYMENT_WINDOW_DAYS = data.get("NEXT_PAYMENT_WINDOW_DAYS", 5)  # Days before due date
    MAX_MONTHS_AHEAD = data.get("MAX_MONTHS_AHEAD", 12)

    # Missing payment sweep
    MISSING_PAYMENT_SWEEP_ENABLED = bool(data.get("MISSING_PAYMENT_SWEEP_ENABLED", True))
    MISSING_PAYMENT_SWEEP_INTERVAL_SECONDS = data.get("MISSING_PAYMENT_SWEEP_INTERVAL_SECONDS", 86400)  # Daily
    MISSING_PAYMENT_NOTIFICATION_WEBHOOK = data.get("MISSING_PAYMENT_NOTIFICATION_WEBHOOK", None)
