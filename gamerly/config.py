"""Application configuration via environment variables."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Gamerly settings loaded from environment variables."""

    # Upstream credentials. RAWG_API_KEY is the name the legacy handler read.
    rawg_key: str = Field(
        "", validation_alias=AliasChoices("RAWG_KEY", "RAWG_API_KEY", "GAMERLY_RAWG_KEY")
    )
    igdb_client_id: str = Field(
        "", validation_alias=AliasChoices("IGDB_CLIENT_ID", "GAMERLY_IGDB_CLIENT_ID")
    )
    igdb_client_secret: str = Field(
        "", validation_alias=AliasChoices("IGDB_CLIENT_SECRET", "GAMERLY_IGDB_CLIENT_SECRET")
    )

    # Upstream endpoints
    rawg_base_url: str = "https://api.rawg.io/api"
    igdb_base_url: str = "https://api.igdb.com/v4"
    twitch_token_url: str = "https://id.twitch.tv/oauth2/token"

    # Optional LibreTranslate-compatible endpoint for non-English descriptions
    translate_url: str = ""

    # Public site URL used in sitemap links
    site_url: str = "https://gamerly.net"

    user_agent: str = "GamerlyApp/1.0"
    http_timeout: float = 15.0

    # Listing policy
    min_release_year: int = 2018

    # CORS (comma-separated extra origins, in addition to localhost defaults)
    cors_origins: str = ""

    log_level: str = "INFO"

    model_config = {
        "env_prefix": "GAMERLY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def has_igdb_credentials(self) -> bool:
        return bool(self.igdb_client_id and self.igdb_client_secret)


# Singleton instance
settings = Settings()
