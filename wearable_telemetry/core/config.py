"""
Configuration settings for the wearable telemetry server
"""

from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application settings"""

    service_name: str = "Open-SmartWatch Communication Server"

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    debug: bool = False
    cors_origins: List[str] = ["*"]

    # Ingestion store
    max_entries: int = 1000
    default_query_limit: int = 50
    unknown_device_id: str = "unknown"

    # Periodic statistics report
    report_interval_seconds: float = 30  # seconds, <= 0 disables

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False

# Global settings instance
settings = Settings()
