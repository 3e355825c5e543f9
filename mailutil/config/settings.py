"""mailutil ambient settings with Pydantic v2.

Manages the library's own runtime settings (logging) loaded from
environment variables or a .env file.

SMTP connection values are deliberately not part of this model: each SMTP
key is resolved on its own across properties and environment by
``mailutil.config.resolver``.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MailutilSettings(BaseSettings):
    """mailutil runtime settings.

    Loads settings from environment variables and .env file using Pydantic v2.
    All settings are case-sensitive and strictly validated.

    Attributes:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        LOG_TO_FILE: Whether to log to file.
        LOG_DIR: Directory for log files.
        LOG_MAX_SIZE_MB: Maximum log file size before rotation.
        LOG_BACKUP_COUNT: Number of rotated log files to keep.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level",
    )
    LOG_TO_FILE: bool = Field(
        default=False,
        description="Whether to log to file",
    )
    LOG_DIR: str = Field(
        default="./logs",
        description="Directory for log files",
    )
    LOG_MAX_SIZE_MB: int = Field(
        default=10,
        gt=0,
        description="Maximum log file size in megabytes",
    )
    LOG_BACKUP_COUNT: int = Field(
        default=5,
        gt=0,
        description="Number of backup log files to keep",
    )
