"""Application configuration."""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""
    
    # App
    APP_NAME: str = "Device Repair Ledger"
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    
    # Database
    # In-process SQLite keeps the ledger self-contained; point at a file or server for durability.
    DATABASE_URL: str = "sqlite+pysqlite:///:memory:"
    DATABASE_ECHO: bool = False

    # Logical clock
    GENESIS_CLOCK: int = 0

    # Request context headers
    CALLER_HEADER: str = "X-Caller"
    CLOCK_HEADER: str = "X-Logical-Clock"
    
    class Config:
        env_file = ".env"
        case_sensitive = True
    
    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
