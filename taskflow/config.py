import os

ENV: str = os.getenv("TASKFLOW_ENV", "dev")

# Database
if ENV == "test":
    _DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
else:
    _DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///taskflow.db"

DATABASE_URL: str = os.getenv("TASKFLOW_DATABASE_URL", _DEFAULT_DATABASE_URL)
DB_ECHO: bool = os.getenv("TASKFLOW_DB_ECHO", "false").lower() == "true"

# Paging
DEFAULT_PAGE_SIZE: int = int(os.getenv("TASKFLOW_PAGE_SIZE", "20"))
MAX_PAGE_SIZE: int = int(os.getenv("TASKFLOW_MAX_PAGE_SIZE", "100"))

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Feature toggles
ENABLE_PROMETHEUS: bool = os.getenv("ENABLE_PROMETHEUS", "true").lower() == "true"
