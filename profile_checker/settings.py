from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    leetcode_api_base_url: str = "https://alfa-leetcode-api.onrender.com"
    github_api_base_url: str = "https://api.github.com"
    codeforces_api_base_url: str = "https://codeforces.com/api"
    codechef_api_base_url: str = "https://codechef-api.vercel.app/handle"
    http_timeout_seconds: float = 15.0
    display_timezone: str | None = None
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
