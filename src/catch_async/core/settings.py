# Logging adapter for package-wide logging
from catch_async.adapters.logging_adapter import LoggingAdapter

from pydantic import field_validator
from pydantic_settings import BaseSettings

from catch_async.core.interfaces.logging import LoggingPort
from catch_async.core.logging_config import PACKAGE_LOGGER, coerce_level


# using pydantic_settings to read environment variables
# and do automatic type casting in a central place.
# No env_file: a library must not pick up the host application's .env
class CatchAsyncSettings(BaseSettings):
    model_config = {
        "case_sensitive": True,
        "extra": "ignore"
    }
    CATCH_ASYNC_LOG_LEVEL: str = "WARNING"

    def print_settings(self, logger: LoggingPort):
        """Logs the settings for debugging purposes"""
        logger.info("catch_async settings: %s", self.model_dump())

    @field_validator("CATCH_ASYNC_LOG_LEVEL", mode="before")
    def normalize_level(cls, value: str) -> str:
        """Accept known level names in any case."""
        name = str(value).upper().strip()
        coerce_level(name)
        return name


app_settings = CatchAsyncSettings()

logger = LoggingAdapter(PACKAGE_LOGGER, app_settings.CATCH_ASYNC_LOG_LEVEL)
