"""
Application settings using Pydantic Settings.

Environment variables are loaded from .env file.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.
    
    Create a .env file in the project root with these values
    (see .env.example).
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # ========================================================================
    # Database
    # ========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "legisync"
    MONGODB_TIMEOUT_MS: int = 10000
    
    # ========================================================================
    # Source mirror
    # ========================================================================
    
    # GovTrack bulk data, laid out as {mirror}/{session}/{bills,rolls}/*.xml
    SOURCE_MIRROR_URL: str = "https://www.govtrack.us/data/us"
    DATA_DIR: str = "data/govtrack"
    FETCH_TIMEOUT: float = 60.0
    
    # ========================================================================
    # Ingestion runs
    # ========================================================================
    
    # A run lock older than this is taken to belong to a killed run
    LOCK_STALE_AFTER_MINUTES: int = 360
    
    # ========================================================================
    # API Configuration
    # ========================================================================
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = False
    
    # ========================================================================
    # Logging
    # ========================================================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    
    # ========================================================================
    # Application
    # ========================================================================
    APP_NAME: str = "legisync"
    APP_VERSION: str = "0.1.0"


# Singleton instance
settings = Settings()
