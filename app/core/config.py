"""
Application configuration settings.
Loads from environment variables with type checking.
"""

from pydantic import validator
from pydantic_settings import BaseSettings
from typing import Optional, List, Union

class Settings(BaseSettings):
    # Application Metadata
    PROJECT_TITLE: str = "Bookmarks API"
    PROJECT_DESCRIPTION: str = "REST service for managing bookmarks"
    PROJECT_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"  # or 'testing', 'production'

    # Database Configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./bookmarks.db"
    TEST_DATABASE_URL: Optional[str] = None
    SQL_ECHO: bool = False

    # Authentication
    API_TOKEN: str

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["*"]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",")]
        return v

    @validator("API_TOKEN")
    def validate_api_token(cls, v):
        if not v.strip():
            raise ValueError("API_TOKEN cannot be empty")
        return v

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        """Database URL with an async driver for PostgreSQL"""
        return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)

    @property
    def IS_PRODUCTION(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


settings = Settings()
