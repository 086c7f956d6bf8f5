"""Application configuration."""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "postgresql+asyncpg://leadgen:leadgen123@db:5432/leadgen"
    
    # Apollo
    APOLLO_BASE_URL: str = "https://api.apollo.io/"
    APOLLO_API_KEY: Optional[str] = None
    PROVIDER_TIMEOUT_SECONDS: float = 30.0
    
    # "first_match" or "aggregate"
    PROVIDER_STRATEGY: str = "first_match"
    
    # Paging
    EXPORT_BATCH_SIZE: int = 10
    
    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
