# app/config.py
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent

APP_ENV: str = os.getenv("APP_ENV", "development")
IS_PRODUCTION: bool = APP_ENV == "production"

DATA_DIR = PROJECT_ROOT / "data"
DB_PATH = DATA_DIR / "content.db"

DATABASE_URL: str = os.getenv("DATABASE_URL", "")
if not DATABASE_URL:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    DATABASE_URL = f"sqlite:///{DB_PATH.as_posix()}"

# LLM provider
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

# Sessions
SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "session_token")
SESSION_DAYS: int = int(os.getenv("SESSION_DAYS", "7"))

# pbkdf2_sha256 cost factor (fixed so hashes stay comparable across deploys)
PASSWORD_HASH_ROUNDS: int = int(os.getenv("PASSWORD_HASH_ROUNDS", "29000"))

HISTORY_LIMIT: int = int(os.getenv("HISTORY_LIMIT", "50"))

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_PATH: str = os.getenv("LOG_PATH", "")
LOG_BACKUP_DAYS: int = int(os.getenv("LOG_BACKUP_DAYS", "7"))
