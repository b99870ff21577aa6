from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .common.log import LEVEL_MAP, apply_log_level

UINT32_MAX = 2**32 - 1

class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.

    This contains static configuration from .env file (log level, debug switches, defaults).
    NOT to be confused with:
    - TimerPresets: the valid timer durations offered for a conversation
    - DisappearingMessagesConfiguration: the per-conversation timer record
    """

    # Logging
    LOG_LEVEL: str = "INFO"  # can be: TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL

    DEBUG_MODE: bool = False  # Report inconsistent timer input at ERROR instead of WARNING

    # Timer applied to a conversation when disappearing messages are switched on without a duration
    DEFAULT_DURATION_SECONDS: int = Field(default=86400, gt=0, le=UINT32_MAX)

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LEVEL_MAP:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LEVEL_MAP)}, got '{v}'")
        return level

    class Config:
        env_file = './.env'
        extra = 'ignore'


# Singleton instance of application configuration
app_config = AppConfig()

# Environment and ./.env both decide the log level
apply_log_level(app_config.LOG_LEVEL)
