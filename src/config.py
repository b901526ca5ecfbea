import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///family_budget.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

APP_NAME = os.getenv("APP_NAME", "family-budget-api")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
APP_ENV = os.getenv("APP_ENV", "development")

# Used when a request carries no X-User-Id header
DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "demo-user-id")

APP_LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "INFO")
THIRD_PARTY_LOG_LEVEL = os.getenv("THIRD_PARTY_LOG_LEVEL", "WARNING")
# Console only when unset
LOG_FILE = os.getenv("LOG_FILE")
LOG_FILE_MAX_BYTES = int(os.getenv("LOG_FILE_MAX_BYTES", str(5 * 1024 * 1024)))
LOG_FILE_BACKUPS = int(os.getenv("LOG_FILE_BACKUPS", "3"))


def is_development() -> bool:
    return APP_ENV == "development"
