# remote_sdk/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
)


class ClientSettings(BaseSettings):
    LOGGING_LEVEL: str = Field(
        "INFO",
        json_schema_extra={"examples": ["DEBUG", "INFO", "WARNING", "ERROR"]}
    )
    API_PREFIX: str = "/api/remote"
    SECRET_HEADER: str = "X-Remote-Secret"
    REQUEST_TIMEOUT: float = Field(
        30.0, description="Таймаут одной операции HTTP-транспорта, в секундах."
    )
    RESOURCE_TIMEOUT: float = Field(
        60.0, description="Общий дедлайн на выполнение запроса целиком, в секундах."
    )
    DEFAULT_PAGE_LIMIT: int = Field(20, ge=1)
    DISPLAY_LOCALE: str = Field(
        "ru", description="Локаль для отображения дат и логических значений."
    )

    model_config = SettingsConfigDict(
        env_prefix="REMOTE_SDK_",
        extra='ignore',
    )


@lru_cache()
def get_settings() -> ClientSettings:
    return ClientSettings()
