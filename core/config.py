"""
Centralized configuration management with validation.

All environment variables are loaded and validated here.
Configuration is read once at startup; the BMI core never reads it.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Any, List
from dotenv import load_dotenv

load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"
# Names both the stdlib and uvicorn understand
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Application settings with validation."""
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )
    
    # Server Configuration
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=DEFAULT_PORT)
    
    # Logging Configuration
    LOG_LEVEL: str = Field(default=DEFAULT_LOG_LEVEL)
    LOG_FORMAT: str = Field(default="json")  # json or text
    
    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    
    # CORS - "*" or a comma-separated list of allowed origins
    # e.g., "https://bmi.example.com,https://www.bmi.example.com"
    CORS_ORIGINS: str = Field(default="*")

    @field_validator("PORT", mode="before")
    @classmethod
    def _fallback_port(cls, value: Any) -> int:
        """Anything that isn't a usable TCP port means the default."""
        try:
            port = int(str(value).strip())
        except (TypeError, ValueError):
            return DEFAULT_PORT
        if not 0 < port < 65536:
            return DEFAULT_PORT
        return port

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _known_log_level(cls, value: Any) -> str:
        level = str(value).strip().upper()
        return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL

    @property
    def cors_origins(self) -> List[str]:
        origins = [origin.strip() for origin in self.CORS_ORIGINS.split(",")]
        origins = [origin for origin in origins if origin]
        return origins or ["*"]


# Global settings instance
settings = Settings()
