from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ErrorResponseSettings(BaseSettings):
    """Settings for derived error responses, loaded from environment variables.

    Every field can be set with an ``ERROR_RESPONSE_`` prefixed env var
    (case-insensitive). In development, values are also read from a .env file.
    """

    # Body sent in place of the real message for every 5xx response.
    # Must not depend on the error being answered.
    internal_error_message: str = "Internal server error"

    # Causes walked before the chain is cut off (guards against cycles)
    max_cause_depth: int = Field(default=32, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="ERROR_RESPONSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


settings = ErrorResponseSettings()
