"""
Runtime configuration read from the environment (and a .env file if present).
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

APP_NAME = "Recipe Catalog"
VERSION = "1.0.0"

DEFAULT_PORT = 5000

# Cross-origin policy is fixed for the catalog front end
CORS_ORIGIN = "https://taradeshpande.com"
CORS_METHODS = ["GET", "POST", "PUT", "DELETE"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def _database_path(url: str) -> str:
    """Accept either a plain SQLite path or a sqlite:/// URL."""
    prefix = "sqlite:///"
    if url.startswith(prefix):
        return url[len(prefix):] or ":memory:"
    return url


@dataclass
class Settings:
    database_path: str = "recipes.db"
    upload_dir: str = "uploads"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: [CORS_ORIGIN])

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            database_path=_database_path(os.environ.get("DATABASE_URL", "recipes.db")),
            upload_dir=os.environ.get("UPLOAD_DIR", "uploads"),
            port=int(os.environ.get("PORT", DEFAULT_PORT)),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
