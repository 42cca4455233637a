"""
Configuration management for the Clarifai Tagger.
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings


# Clarifai's public "general" concept model
GENERAL_MODEL_ID = "aaa03c23b3724a16a56b629203edc62c"


class Settings(BaseSettings):
    """Application settings with validation."""

    # Clarifai Configuration
    clarifai_api_base: str = Field(default="https://api.clarifai.com", env="CLARIFAI_API_BASE")
    clarifai_model_id: str = Field(default=GENERAL_MODEL_ID, env="CLARIFAI_MODEL_ID")
    clarifai_keys_file: str = Field(default="keys.txt", env="CLARIFAI_KEYS_FILE")  # App ID + App Secret, one per line

    # Logging Configuration
    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    @validator("clarifai_api_base")
    def validate_api_base(cls, v):
        """Ensure the API base URL is properly formatted."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("CLARIFAI_API_BASE must start with http:// or https://")
        return v.rstrip("/")

    @validator("clarifai_model_id")
    def validate_model_id(cls, v):
        """Ensure a model id was given."""
        if not v.strip():
            raise ValueError("CLARIFAI_MODEL_ID must not be empty")
        return v.strip()

    @validator("log_level")
    def validate_log_level(cls, v):
        """Ensure the log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
