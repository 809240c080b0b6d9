"""Application wide configuration constants."""

import os
from pathlib import Path

from dotenv import load_dotenv

# .env lives next to the package so the app starts the same way from any cwd
load_dotenv(Path(__file__).with_name(".env"))

APP_NAME = os.getenv("APP_NAME", "Professor Aid")

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# Name given to a profile when sign-up metadata has no full name
DEFAULT_PROFILE_NAME = os.getenv("DEFAULT_PROFILE_NAME", "Professor")

PASSWORD_MIN_LENGTH = int(os.getenv("PASSWORD_MIN_LENGTH", "6"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:8080").split(",")
    if origin.strip()
]
