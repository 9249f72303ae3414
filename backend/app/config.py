from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "EstateGuard Concierge"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./estateguard.db"
    cors_origins: str = "http://localhost:5173"

    # Gemini. The key falls back to the alias the dashboard build used.
    google_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GOOGLE_API_KEY", "VITE_GOOGLE_API_KEY"),
    )
    # Ordered "model:api_version" candidates, tried first to last
    gemini_models: str = (
        "gemini-2.0-flash:v1beta,"
        "gemini-flash-latest:v1beta,"
        "gemini-pro-latest:v1beta,"
        "gemini-2.0-flash-lite:v1beta"
    )
    llm_temperature: float = 0.1
    llm_timeout_seconds: float = 60.0

    # Fetch proxy used for URL ingestion
    fetch_user_agent: str = "EstateGuard-AI-Agent/1.0 (Mozilla/5.0)"
    fetch_timeout_seconds: float = 20.0
    scrape_max_chars: int = 100_000

    model_config = {"env_file": ".env", "populate_by_name": True, "extra": "ignore"}


settings = Settings()
