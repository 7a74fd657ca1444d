"""Provider configuration."""

import warnings

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Provider settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = "development"
    debug: bool = False

    # Provider
    provider_type_name: str = "montecarlo"

    # Monte Carlo API
    mc_api_url: str = "https://api.getmontecarlo.com/graphql"
    mc_api_key_id: str = ""
    mc_api_key_token: str = ""
    mc_api_timeout: int = 30  # seconds

    # Logging
    log_level: str = "INFO"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.mc_api_key_id or not self.mc_api_key_token:
            if self.environment == "production":
                raise ValueError(
                    "MC_API_KEY_ID and MC_API_KEY_TOKEN must be set in production environment"
                )
            warnings.warn(
                "MC_API_KEY_ID / MC_API_KEY_TOKEN not set, "
                "Monte Carlo API calls will be rejected.",
                UserWarning,
            )


settings = Settings()
