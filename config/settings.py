"""
Configuration management for the timetable API.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "School Timetable Grid API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # Timetable defaults
    default_days: List[str] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
    fallback_break_names: List[str] = ["Break", "Lunch", "Recess", "Assembly"]
    no_teacher_label: str = "N/A"

    # Generation service (Gemini)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-pro"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout_seconds: float = 120.0
    gemini_max_retries: int = 3

    # Export
    pdf_title_prefix: str = "School Timetable"

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
