from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
import logging

from .state import SharedState
from .types import GoogleTransport

logger = logging.getLogger(__name__)

# Settings attributes that are handed to adapters through the shared state.
CREDENTIAL_KEYS = (
    "google_access_token",
    "google_refresh_token",
    "google_service_api_url",
    "drive_client_id",
    "drive_client_secret",
    "drive_redirect_uri",
    "drive_refresh_token",
    "gmail_client_id",
    "gmail_client_secret",
    "gmail_redirect_uri",
    "gmail_refresh_token",
    "wordpress_url",
    "wordpress_username",
    "wordpress_password",
)


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Adapters
    google_transport: GoogleTransport = GoogleTransport.PROXY
    http_timeout_seconds: float = 30.0

    # Publishing
    packages_dir: str = "packages"
    publish_timeout_seconds: int = 120

    log_level: str = "INFO"

    # Google proxy
    google_access_token: str = ""
    google_refresh_token: str = ""
    google_service_api_url: str = ""

    # Google OAuth2 apps
    drive_client_id: str = ""
    drive_client_secret: str = ""
    drive_redirect_uri: str = ""
    drive_refresh_token: str = ""
    gmail_client_id: str = ""
    gmail_client_secret: str = ""
    gmail_redirect_uri: str = ""
    gmail_refresh_token: str = ""

    # WordPress
    wordpress_url: str = ""
    wordpress_username: str = ""
    wordpress_password: str = ""

    def to_state(self) -> SharedState:
        """Expose the non-empty credential settings as a crew state ``env`` map."""
        env = {
            key.upper(): getattr(self, key)
            for key in CREDENTIAL_KEYS
            if getattr(self, key)
        }
        return SharedState({"env": env})


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    logger.info(f"Settings loaded - Google transport: {settings.google_transport.value}")
    logger.info(f"Settings loaded - Google service API URL: {settings.google_service_api_url or '(unset)'}")
    return settings
