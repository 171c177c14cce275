from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Components receive
    the values they need at construction time and never read the
    environment themselves.
    """

    def __init__(self) -> None:
        self.groq_api_key: Optional[str] = os.getenv("GROQ_API_KEY") or None
        self.groq_model: str = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
        self.remote_timeout: float = float(os.getenv("REMOTE_TIMEOUT_SECONDS", "18"))
        self.remote_temperature: float = float(os.getenv("REMOTE_TEMPERATURE", "0.3"))
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "8080"))
        self.telemetry_interval: float = float(os.getenv("TELEMETRY_INTERVAL_SECONDS", "2"))
        self.ask_log_file: str = os.getenv("ASK_LOG_FILE", "ask_logs.jsonl")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def remote_enabled(self) -> bool:
        return bool(self.groq_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
