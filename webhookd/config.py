"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable loading and sensible defaults."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WEBHOOKD_",
        case_sensitive=False,
    )

    app_name: str = "webhookd-github"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    # Pipeline descriptors
    receiver_uri: str = "github://"
    transformation_uris: str = "githubcommits://"

    @property
    def transformation_uri_list(self) -> list[str]:
        """Split the comma-separated transformation descriptors, dropping blanks."""
        return [uri.strip() for uri in self.transformation_uris.split(",") if uri.strip()]


settings = Settings()
