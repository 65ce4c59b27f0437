"""
Configuration settings for the Fleet Tracking backend
"""

from pydantic_settings import BaseSettings
from typing import List
import os


class Settings(BaseSettings):
    """Application settings"""

    # Application
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    ENV: str = os.getenv("ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # API server
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "5000"))

    # Trip event logs
    TRIPS_DATA_DIR: str = os.getenv("TRIPS_DATA_DIR", "data/trips")
    # Abort startup instead of serving zero trips when the data directory is missing
    FAIL_ON_MISSING_DATA: bool = os.getenv("FAIL_ON_MISSING_DATA", "False").lower() == "true"

    # Simulation playback multiplier suggested to dashboards
    SIMULATION_DEFAULT_SPEED: int = int(os.getenv("SIMULATION_DEFAULT_SPEED", "5"))

    # JWT
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "your-secret-key-change-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Demo login (no user store behind it)
    AUTH_USERNAME: str = os.getenv("AUTH_USERNAME", "admin")
    AUTH_PASSWORD: str = os.getenv("AUTH_PASSWORD", "admin")

    # CORS
    CORS_ORIGINS: List[str] = ["*"]  # Change in production

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
