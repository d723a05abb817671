# Руководство к файлу
# Назначение: шаг обхода одной задачи: https-проба внешних http-ссылок, загрузка,
#   классификация (внешняя/редирект/глубина) и извлечение дочерних ссылок.
# Этап: базовая реализация. Обновляйте комментарий при изменениях.

from __future__ import annotations

import logging
from typing import List, Optional

from httpsyet.core.types import CrawlError, Fetch, FetchResult, Result, StepOutcome, Task
from httpsyet.frontier.rate_limiter import RateLimiter
from httpsyet.parse.link_extractor import LinkExtractor
from httpsyet.utils.mime import is_html
from httpsyet.utils.url import get_host, get_scheme, to_urls, with_scheme


class CrawlStep:
    """Конечный автомат обработки одной задачи.

    1. Внешняя http-ссылка сначала пробуется по https; статус < 400 даёт
       Result(page=родитель, link=исходный http-URL), сама http-страница не грузится.
    2. Иначе страница загружается как есть; сетевая ошибка или статус >= 400 — CrawlError.
    3. Редирект на другой хост делает страницу внешней.
    4. Внешние страницы и задачи с depth == 1 не разбираются.
    5. Остальные: ссылки из HTML становятся дочерними задачами.

    Https-проба делается только для внешних ссылок: схема своего сайта не проверяется.
    """

    def __init__(
        self,
        fetch: Fetch,
        log: logging.Logger,
        *,
        limiter: Optional[RateLimiter] = None,
        verbose: bool = False,
    ) -> None:
        self._fetch = fetch
        self._log = log
        self._limiter = limiter or RateLimiter()
        self._verbose = verbose

    async def _get(self, url: str) -> FetchResult:
        if self._verbose:
            self._log.info("verbose: GET %s", url)
        async with self._limiter.slot(url):
            return await self._fetch(url)

    async def __call__(self, task: Task) -> StepOutcome:
        url = task.url
        shown = task.display
        is_external = task.parent is not None and get_host(url) != get_host(task.parent)

        # внешняя http-ссылка: если https работает — это и есть результат
        if is_external and get_scheme(url) == "http":
            probe = await self._get(with_scheme(url, "https"))
            if probe.ok:
                return StepOutcome(result=Result(page=task.parent, link=shown))

        res = await self._get(url)
        if res.error is not None:
            return StepOutcome(error=CrawlError(shown, f"failed to get {shown}: {res.error}", task.parent))
        if res.status >= 400:
            return StepOutcome(error=CrawlError(shown, f"{res.status} {shown}", task.parent))

        final = res.final_url or url
        # редирект увёл на другой сайт
        if get_host(final) != get_host(url):
            is_external = True

        if is_external or task.depth == 1:
            return StepOutcome()
        if not is_html(res.content_type):
            return StepOutcome()

        problems: List[str] = []
        hrefs: List[str] = []
        try:
            hrefs = LinkExtractor.extract_hrefs(res.body)
        except ValueError as e:
            problems.append(f"failed to parse HTML: {e}")

        urls, invalid = to_urls(hrefs, base=final)
        if invalid:
            problems.append(invalid)

        error = None
        if problems:
            error = CrawlError(shown, f"page {shown}: " + "; ".join(problems))
        return StepOutcome(children=tuple(task.child(u.key, u.href) for u in urls), error=error)
