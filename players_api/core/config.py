"""Configuration settings for the Players API service."""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

DEFAULT_TIMEOUT_TO_PUBLISH_SEC = 3
DEFAULT_EVENT_QUEUE_SIZE = 10


class Settings(BaseSettings):
    """Service settings loaded from ``PLAYERS_*`` environment variables."""

    # Database Configuration
    postgres_db: str = Field(default="players")
    postgres_user: str = Field(default="players")
    postgres_password: str = Field(default="dev_password")
    postgres_host: str = Field(default="localhost")
    postgres_port: int = Field(default=5432)

    @property
    def database_url(self) -> str:
        """Construct async database URL from components."""
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    web_server_port: int = Field(default=8080)

    # Build information reported by the health endpoint
    app_version: str = Field(default="dev")
    commit_hash: str = Field(default="")
    build_date: str = Field(default="")

    # Event notifier Configuration
    timeout_to_publish_sec: int = Field(
        default=DEFAULT_TIMEOUT_TO_PUBLISH_SEC,
        description="Seconds to wait for enqueueing and publishing a player event",
    )
    event_queue_size: int = Field(
        default=DEFAULT_EVENT_QUEUE_SIZE,
        description="Capacity of the in-memory player event queue",
    )
    rabbitmq_url: Optional[str] = Field(
        default=None,
        description="AMQP URL of the event bus; events are only logged when unset",
    )
    rabbitmq_routing_key: str = Field(default="players.events")

    @field_validator("timeout_to_publish_sec")
    @classmethod
    def validate_timeout_to_publish(cls, v: int) -> int:
        """Fall back to the default publish timeout for values below one second."""
        if v < 1:
            return DEFAULT_TIMEOUT_TO_PUBLISH_SEC
        return v

    @field_validator("event_queue_size")
    @classmethod
    def validate_event_queue_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("event queue size must be a positive number")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="PLAYERS_",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Build a settings instance from the current environment."""
    return Settings()
