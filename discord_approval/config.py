"""Settings via pydantic-settings.

The two Discord settings are required: a missing or blank value fails
validation, which main() treats as a fatal startup error. Everything else
has a default so a minimal .env only needs the bot token and channel id.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Discord
    discord_bot_token: str = Field(validation_alias="DISCORD_BOT_TOKEN")
    discord_channel_id: str = Field(validation_alias="DISCORD_CHANNEL_ID")
    connection_timeout_ms: int = Field(30000, gt=0, validation_alias="DISCORD_CONNECTION_TIMEOUT")

    # Tools
    default_timeout: int = Field(300, gt=0, validation_alias="DEFAULT_TIMEOUT")

    # Runtime
    log_level: str = Field("info", validation_alias="LOG_LEVEL")
    transport: Literal["stdio", "http"] = Field("stdio", validation_alias="MCP_TRANSPORT")
    host: str = Field("127.0.0.1", validation_alias="MCP_HOST")
    port: int = Field(8000, validation_alias="MCP_PORT")

    @field_validator("discord_bot_token", "discord_channel_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @property
    def connection_timeout(self) -> float:
        """Connection timeout in seconds."""
        return self.connection_timeout_ms / 1000
