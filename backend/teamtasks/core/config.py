from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Team Tasks"
    API_V1_STR: str = "/api/v1"

    MONGODB_URL: str
    DATABASE_NAME: str = "team_tasks"

    # Bearer tokens are issued by the identity provider; we only verify them
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    TOKEN_AUDIENCE: Optional[str] = None

    # Notifications (empty URL disables delivery)
    NOTIFICATION_WEBHOOK_URL: str = ""
    NOTIFICATION_TOPIC: str = "task-notifications"
    NOTIFICATION_TIMEOUT_SECONDS: float = 5.0

    SEARCH_TERM_MAX_LENGTH: int = 200

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")


settings = Settings()
