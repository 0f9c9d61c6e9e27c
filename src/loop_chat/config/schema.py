"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreConfig(BaseModel):
    """Conversation store behaviour."""

    reemit_chat_enabled: bool = Field(
        False,
        description="Emit chat-enabled on every available=true, not only on change",
    )
    room_name_from_context: bool = Field(
        False,
        description="Name the room after its first context url when no room name is given",
    )


class ActionsConfig(BaseModel):
    """Action construction behaviour."""

    reject_name_field: bool = Field(
        False,
        description="Fail construction when values carry a 'name' field instead of dropping it",
    )


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("loop-chat.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()


class AppConfig(BaseSettings):
    """Root configuration for loop-chat."""

    store: StoreConfig = StoreConfig()
    actions: ActionsConfig = ActionsConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="LOOP_CHAT_",
        env_nested_delimiter="__",
    )
