from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Core Settings
    application_id: str | None = Field(None, description="Wargaming application id (API key)")
    region: str = Field("na", description="Server region (na, ru, eu, sea, asia)")
    language: str = Field("en", description="Response language")
    method: str = Field("GET", description="HTTP method used for API calls (GET or POST)")

    # Transport Settings
    use_https: bool = Field(False, description="Call the API over https")
    verify_ssl: bool = Field(True, description="Verify the server certificate on https calls")
    timeout: float | None = Field(None, description="Request timeout in seconds (transport default if unset)")

    # Logging Settings
    log_level: str = Field("INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(False, description="Emit log records as JSON")

    model_config = SettingsConfigDict(env_file=".env", env_prefix="WGAPI_", extra="ignore")

    @field_validator("method")
    @classmethod
    def _check_method(cls, value: str) -> str:
        value = value.upper()
        if value not in ("GET", "POST"):
            raise ValueError("method must be GET or POST")
        return value


@lru_cache
def get_settings() -> Settings:
    """Settings from the environment, read on first use and cached."""
    return Settings()
