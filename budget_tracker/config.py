"""Configuration management using Pydantic Settings"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./budget_tracker.db"

    # Service
    service_name: str = "budget-tracker"
    log_level: str = "INFO"

    # Extraction
    default_category: str = "General"
    default_account_name: str = "Primary Bank"
    currency_markers: List[str] = ["rs.", "rs", "inr", "₹"]

    # Analytics
    currency_symbol: str = "₹"
    analytics_window_months: int = 6


settings = Settings()
