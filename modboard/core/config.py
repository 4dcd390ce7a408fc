"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "modboard"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    log_level: str = getenv("LOG_LEVEL", "INFO")
    database_url: str = getenv("DATABASE_URL", "sqlite:///./modboard.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    session_secret: str = getenv("SESSION_SECRET", "dev-session-secret-change-me")
    admin_user: str = getenv("ADMIN_USER", "")
    admin_pass: str = getenv("ADMIN_PASS", "")
    api_url: str = getenv("MODBOARD_API_URL", "http://localhost:8000")
    report_comment_max_length: int = 1000
    featured_tags_limit: int = 10
    suggestions_default_limit: int = 40
    suggestions_max_limit: int = 80


settings: Settings = Settings()
