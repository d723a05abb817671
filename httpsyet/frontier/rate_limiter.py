# Руководство к файлу
# Назначение: пер-хостовые лимиты запросов (aiolimiter), опционально.
# Этап: базовая реализация. Обновляйте комментарий при изменениях.

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from aiolimiter import AsyncLimiter

from httpsyet.utils.url import get_host


class RateLimiter:
    """Per-host limiter. При per_host_rps=None ограничений нет."""

    def __init__(self, per_host_rps: Optional[float] = None) -> None:
        self._host_limiters: Dict[str, AsyncLimiter] = {}
        self._per_host_rps = per_host_rps

    @property
    def enabled(self) -> bool:
        return self._per_host_rps is not None

    def _get_host_limiter(self, host: str) -> AsyncLimiter:
        if host not in self._host_limiters:
            rps = self._per_host_rps
            # ёмкость не может быть меньше одного запроса: rps < 1 -> 1 запрос за 1/rps секунд
            if rps >= 1:
                self._host_limiters[host] = AsyncLimiter(max_rate=rps, time_period=1)
            else:
                self._host_limiters[host] = AsyncLimiter(max_rate=1, time_period=1 / rps)
        return self._host_limiters[host]

    @asynccontextmanager
    async def slot(self, url: str) -> AsyncIterator[None]:
        if not self.enabled:
            yield None
            return
        async with self._get_host_limiter(get_host(url)):
            yield None
