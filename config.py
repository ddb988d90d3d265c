"""
Application settings.

Values are read from the process environment, after loading a ``.env``
file from the working directory if one exists. Variables already set in
the environment take precedence over the file.
"""

import os
import secrets
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _split(value: str):
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Settings loaded from environment variables."""

    # Empty means "not configured"; a random per-process key is used instead.
    secret_key: str = field(default_factory=lambda: os.getenv("SECRET_KEY", ""))
    algorithm: str = os.getenv("ALGORITHM", "HS256")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480"))

    db_path: str = os.getenv("DB_PATH", "db.json")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Initial admin account, created on startup when no admin exists.
    admin_username: str = os.getenv("ADMIN_USERNAME", "")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")
    admin_full_name: str = os.getenv("ADMIN_FULL_NAME", "Administrator")

    cors_origins: list = field(default_factory=lambda: _split(os.getenv("CORS_ORIGINS", "*")))

    secret_key_generated: bool = field(default=False, init=False)

    def __post_init__(self):
        if not self.secret_key:
            # Tokens signed with this key stop working when the process restarts.
            self.secret_key = secrets.token_urlsafe(32)
            self.secret_key_generated = True


settings = Settings()
