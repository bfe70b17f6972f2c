from pathlib import Path
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """
    Centralized application configuration with type validation.
    Automatically reads variables from the environment and the .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Remote API Settings ---
    API_BASE_URL: str
    API_TIMEOUT_SECONDS: float = 30.0
    API_VERIFY_SSL: bool = True

    # --- General Settings ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE_NAME: str = "apifs.log"

    # --- Constants and Computed Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent

    @model_validator(mode="after")
    def validate_api_settings(self):
        base_url = self.API_BASE_URL.strip()
        if not base_url.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with 'http://' or 'https://'")
        # Endpoints are joined as '<base>/<name>', so a trailing slash would double up.
        self.API_BASE_URL = base_url.rstrip("/")

        if self.API_TIMEOUT_SECONDS <= 0:
            raise ValueError("API_TIMEOUT_SECONDS must be a positive number")
        return self

    @property
    def LOG_FILE(self) -> Path:
        return self.BASE_DIR / self.LOG_FILE_NAME


@lru_cache()
def get_settings() -> Settings:
    """
    Returns a cached instance of the application settings.
    The first call to this function will initialize the settings.
    """
    return Settings()
