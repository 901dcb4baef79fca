"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Aggregate API (one GET resource per chart) and the generation endpoint
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:5000/api")
    GENERATION_URL: str = os.getenv("GENERATION_URL", "http://localhost:5000/api/chat-response")

    # Transport-level timeout; the dashboard itself imposes none
    REQUEST_TIMEOUT_S: float = float(os.getenv("REQUEST_TIMEOUT_S", "30"))

    # Open dashboard sessions kept in memory (least recently used is closed first)
    MAX_SESSIONS: int = int(os.getenv("MAX_SESSIONS", "64"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Initial selections
    DEFAULT_CATEGORY: str = os.getenv("DEFAULT_CATEGORY", "Energy Monitoring")
    DEFAULT_DAY: str = os.getenv("DEFAULT_DAY", "2024-07-30")
    DEFAULT_DEPARTMENT: str = os.getenv("DEFAULT_DEPARTMENT", "Melting")


settings = Settings()
