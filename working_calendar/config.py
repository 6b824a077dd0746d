# working_calendar/config.py
"""Environment-driven settings for the working calendar service."""

import os
from pathlib import Path

DEFAULT_DB_PATH = Path(__file__).parent / "data.db"

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DEFAULT_DB_PATH}")

SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")
