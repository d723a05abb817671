# Руководство к файлу
# Назначение:
# - Настройки окружения для CLI (webhook, user-agent, таймауты, логирование).
# - Все значения можно переопределить через переменные окружения с префиксом HTTPSYET_.

from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Базовые настройки httpsyet."""

    model_config = SettingsConfigDict(env_prefix="HTTPSYET_")

    # Уведомления
    slack_webhook: Optional[str] = Field(default=None, description="Incoming webhook для отправки результатов")
    slack_username: Optional[str] = Field(default=None, description="Имя отправителя в канале")
    slack_channel: Optional[str] = Field(default=None, description="Канал вместо канала по умолчанию")
    slack_icon_emoji: Optional[str] = Field(default=None, description="Иконка сообщения, например :lock:")

    # Сеть
    user_agent: str = Field(default="httpsyet/0.1 (+https://qvl.io/httpsyet)")
    request_timeout_ms: int = Field(default=15000, description="Таймаут одного запроса, мс")

    # Логирование
    log_level: str = Field(default="WARNING")
    log_json: bool = Field(default=False)


def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
