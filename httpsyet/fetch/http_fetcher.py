# Руководство к файлу
# Назначение: функция загрузки по умолчанию: одна aiohttp.ClientSession на весь обход,
#   редиректы, финальный URL, сетевые ошибки как данные.
# Этап: базовая реализация на aiohttp. Обновляйте комментарий при изменениях.
# Важно: проверка TLS-сертификатов включена, иначе https-проба даст ложные срабатывания.

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp
from aiohttp import hdrs

from httpsyet.core.types import FetchResult

_ACCEPT = "text/html,application/xhtml+xml;q=0.9,*/*;q=0.5"

# всё, что означает «страница недоступна», а не ошибку в коде
_NETWORK_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError)


class HttpFetcher:
    """Загрузка страниц для краулера.

    В краулер передаётся связанный метод `fetcher.fetch`. Исключений он не бросает:
    недоступный адрес даёт FetchResult со status=0 и текстом ошибки.
    Тело читается только у ответов со статусом < 400, ссылки ищутся лишь в них.
    """

    def __init__(self, user_agent: str, timeout_ms: int, max_redirects: int = 10) -> None:
        self._headers = {hdrs.USER_AGENT: user_agent, hdrs.ACCEPT: _ACCEPT}
        self._timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000.0)
        self._max_redirects = max_redirects
        self._session: Optional[aiohttp.ClientSession] = None
        self._log = logging.getLogger(__name__)

    async def start(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout, headers=self._headers)

    async def stop(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            await session.close()

    async def __aenter__(self) -> "HttpFetcher":
        await self.start()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.stop()

    async def fetch(self, url: str) -> FetchResult:
        if self._session is None:
            raise RuntimeError("HttpFetcher is not started")
        try:
            async with self._session.get(url, max_redirects=self._max_redirects) as resp:
                return await self._to_result(url, resp)
        except _NETWORK_ERRORS as e:
            self._log.warning("http-fetch-failed url=%s err=%r", url, e)
            return FetchResult(url=url, final_url=None, status=0, error=str(e) or type(e).__name__)

    @staticmethod
    async def _to_result(url: str, resp: aiohttp.ClientResponse) -> FetchResult:
        body = await resp.read() if resp.status < 400 else b""
        return FetchResult(
            url=url,
            final_url=str(resp.url),
            status=resp.status,
            content_type=resp.headers.get(hdrs.CONTENT_TYPE),
            body=body,
        )
