# Руководство к файлу
# Назначение: отправка сообщения в incoming webhook (Slack и совместимые).
# Этап: базовая реализация на httpx. Обновляйте комментарий при изменениях.
# Важно: любой ответ вне 2xx — ошибка (SinkError) со статусом и телом ответа.

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import httpx
import orjson

from httpsyet.core.errors import SinkError

logger = logging.getLogger(__name__)


@dataclass
class SlackData:
    """Тело запроса к webhook. Пустые необязательные поля не отправляются."""

    text: str
    username: Optional[str] = None
    channel: Optional[str] = None
    icon_emoji: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if k == "text" or v}


async def post(hook: str, text: str) -> None:
    """Отправить текст в webhook с настройками по умолчанию."""
    await post_custom(hook, SlackData(text=text))


async def post_custom(
    hook: str,
    data: SlackData,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = 10.0,
) -> None:
    """Отправить сообщение, переопределив имя/канал/иконку или HTTP-клиент."""

    body = orjson.dumps(data.to_payload())
    headers = {"Content-Type": "application/json"}
    try:
        if client is not None:
            resp = await client.post(hook, content=body, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=timeout) as own:
                resp = await own.post(hook, content=body, headers=headers)
    except httpx.HTTPError as e:
        raise SinkError(f"failed to post to Slack: {e}") from e

    if not resp.is_success:
        raise SinkError(f"HTTP status code is not OK ({resp.status_code}): '{resp.text}'")
    logger.debug("webhook-posted status=%d bytes=%d", resp.status_code, len(body))
