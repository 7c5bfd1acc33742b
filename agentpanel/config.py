from functools import lru_cache

from pydantic_settings import BaseSettings

GMAIL_ENV_VARS = {
    "google_client_id": "GOOGLE_CLIENT_ID",
    "google_client_secret": "GOOGLE_CLIENT_SECRET",
    "google_refresh_token": "GOOGLE_REFRESH_TOKEN",
    "google_redirect_uri": "GOOGLE_REDIRECT_URI",
}

NOTION_ENV_VARS = {
    "notion_api_key": "NOTION_API_KEY",
    "notion_database_id": "NOTION_DATABASE_ID",
    "notion_data_source_id": "NOTION_DATA_SOURCE_ID",
}


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 9000
    log_level: str = "INFO"
    localhost_only: bool = True

    google_client_id: str = ""
    google_client_secret: str = ""
    google_refresh_token: str = ""
    google_redirect_uri: str = ""

    notion_api_key: str = ""
    notion_database_id: str = ""
    notion_data_source_id: str = ""
    notion_api_version: str = "2025-09-03"
    notion_api_base_url: str = "https://api.notion.com/v1"
    notion_timeout: float = 60.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def missing(self, env_vars: dict[str, str]) -> list[str]:
        """Return the environment variable names whose settings are empty."""
        return [env for field, env in env_vars.items() if not getattr(self, field)]


@lru_cache
def get_settings() -> Settings:
    return Settings()
