from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Priority: environment variables > .env file
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # Channels group every connection joins for fan-out.
    BROADCAST_GROUP: str = "social.broadcast"
    # Frames larger than this are rejected before JSON decoding.
    MAX_FRAME_BYTES: int = 256 * 1024

    ADMIN_USERNAME: str = "admin"
    ADMIN_EMAIL: str = "admin@example.com"
    # Seed password for the admin account; override in every real deployment.
    ADMIN_PASSWORD: str = "000"

    INSTANCE_ID: Optional[str] = None


config = Settings()
