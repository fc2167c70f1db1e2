from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # App
    app_name: str = "Developer Profiles"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    # Database
    database_url: str = "sqlite:///data/dev_profiles.db"

    # GitHub
    github_api_url: str = "https://api.github.com"
    github_token: Optional[str] = None
    github_timeout_seconds: float = 10.0

    # Auth
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 5

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
