from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server-to-Server OAuth app credentials
    zoom_account_id: str = ""
    zoom_client_id: str = ""
    zoom_client_secret: str = ""

    zoom_oauth_url: str = "https://zoom.us/oauth/token"
    zoom_api_base_url: str = "https://api.zoom.us/v2"

    # Seconds, applied to every upstream call
    http_timeout: float = 15

    app_env: str = "production"
    port: int = 9292
    web_concurrency: int = 2
    log_level: str = "INFO"

    # CORS: comma-separated allowed origins (empty = allow all)
    cors_origins: str = ""

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def has_oauth_credentials(self) -> bool:
        return bool(self.zoom_account_id and self.zoom_client_id and self.zoom_client_secret)


settings = Settings()


def get_settings() -> Settings:
    """Read settings from the current environment on every request."""
    return Settings()
