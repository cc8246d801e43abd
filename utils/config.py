"""
Application configuration loaded from environment variables
"""

import os
from dotenv import load_dotenv

load_dotenv()

COLLECTIONS = (
    "patients",
    "events",
    "memos",
    "doctor_notes",
    "alerts",
    "charges",
    "payment_methods",
)


class Settings:
    """Runtime settings. Values are read once at construction time."""

    def __init__(self):
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # memory | file | sql | jsonbin
        self.store_backend = os.getenv("STORE_BACKEND", "file").lower()
        self.data_dir = os.getenv("DATA_DIR", "./data")
        self.database_url = os.getenv(
            "DATABASE_URL", "sqlite+aiosqlite:///./clinicdesk.db"
        )

        self.jsonbin_urls = {
            name: os.getenv(f"JSONBIN_{name.upper()}_URL") for name in COLLECTIONS
        }
        self.jsonbin_master_key = os.getenv("JSONBIN_MASTER_KEY")
        self.jsonbin_timeout = float(os.getenv("JSONBIN_TIMEOUT", "10"))
        self.jsonbin_retries = int(os.getenv("JSONBIN_RETRIES", "3"))

        self.groq_api_key = os.getenv("GROQ_API_KEY")
        self.groq_model = os.getenv("GROQ_MODEL", "openai/gpt-oss-20b")

        self.cors_origins = [
            origin.strip()
            for origin in os.getenv(
                "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
            ).split(",")
            if origin.strip()
        ]

    @property
    def debug(self) -> bool:
        return self.environment == "development"


settings_instance = None


def get_settings() -> Settings:
    global settings_instance
    if settings_instance is None:
        settings_instance = Settings()
    return settings_instance
