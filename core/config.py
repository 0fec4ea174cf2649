from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import Optional

from core import constants

# Load environment variables from .env file
load_dotenv()

# Use Pydantic BaseSettings for robust settings management
# Pydantic will automatically read from environment variables.
class Settings(BaseSettings):
    # Core App Settings
    PROJECT_NAME: str = "Resume LaTeX Converter"
    CORS_ORIGINS: list[str] = ["*"]
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Gemini Configuration
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = constants.GEMINI_MODEL
    GEMINI_TEMPERATURE: float = constants.GEMINI_TEMPERATURE
    GEMINI_TOP_K: int = constants.GEMINI_TOP_K
    GEMINI_TOP_P: float = constants.GEMINI_TOP_P
    GEMINI_MAX_OUTPUT_TOKENS: int = constants.GEMINI_MAX_OUTPUT_TOKENS

    # Upload limits (shared by the ingest endpoint and the client validator)
    MAX_FILE_SIZE: int = constants.MAX_FILE_SIZE
    ACCEPTED_FILE_TYPES: list[str] = list(constants.ACCEPTED_FILE_TYPES)

    # Client side
    API_BASE_URL: str = "http://localhost:8000"
    OVERLEAF_URL: str = constants.OVERLEAF_URL

    @property
    def gemini_configured(self) -> bool:
        return bool(self.GEMINI_API_KEY)

settings = Settings()
