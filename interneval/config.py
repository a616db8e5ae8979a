from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from interneval.constants import DEFAULT_ROLE

class Settings(BaseSettings):

    # App Setting
    app_name: str = "InternEval AI"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # Gemini Setting
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "api_key")
    )
    gemini_model: str = "gemini-3-flash-preview"
    gemini_temperature: float = 0.2
    gemini_max_tokens: int = 8192

    # Evaluation Form Setting
    default_role: str = DEFAULT_ROLE
    min_candidates: int = 1
    max_candidates: int = 50

    # CSV Export Setting
    csv_progress_percent_sign: bool = True

    class Config:
        """Pydantic config"""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

def get_settings() -> Settings:
    # Built on every call so the API key is picked up at call time
    return Settings()
