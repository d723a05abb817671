# Руководство к файлу
# Назначение: оркестратор: валидация запуска, пул воркеров, фронтир, приёмник результатов.
# Этап: расширенная реализация. Поддерживает остановку по таймауту через stop().
# Обновляйте комментарий при изменениях.
# Важно: параллельность 10 воркеров по умолчанию; обход заканчивается, когда счётчик фронтира дошёл до нуля.

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, TextIO

from httpsyet.core.config import CrawlConfig
from httpsyet.core.errors import ConfigurationError
from httpsyet.core.types import CrawlError, CrawlStats, Fetch, StepOutcome, Task
from httpsyet.fetch.http_fetcher import HttpFetcher
from httpsyet.frontier.queue import Frontier
from httpsyet.frontier.rate_limiter import RateLimiter
from httpsyet.orchestrator.sink import ResultSink
from httpsyet.orchestrator.step import CrawlStep
from httpsyet.utils.url import UrlRef, to_urls

logger = logging.getLogger(__name__)


class Crawler:
    """Рекурсивный обход сайтов в поиске внешних http-ссылок, которые работают по https.

    out — куда пишутся результаты ("<страница> <http-ссылка>" построчно).
    log — куда пишутся ошибки обхода (битые ссылки, сетевые ошибки).
    fetch — функция загрузки URL; по умолчанию HttpFetcher на aiohttp.

    run() бросает только ConfigurationError; всё, что случилось во время обхода,
    уходит в log, а обход доводится до конца.
    """

    def __init__(
        self,
        cfg: CrawlConfig,
        *,
        out: Optional[TextIO] = None,
        log: Optional[logging.Logger] = None,
        fetch: Optional[Fetch] = None,
    ) -> None:
        self.cfg = cfg
        self.out = out
        self.log = log
        self.fetch = fetch
        self._stop_event = asyncio.Event()

    def stop(self) -> None:
        """Перестать загружать страницы: оставшиеся задачи закрываются без загрузки."""
        if not self._stop_event.is_set():
            logger.info("stop requested, draining frontier")
            self._stop_event.set()

    def _validate(self) -> List[UrlRef]:
        self.cfg.validate()
        if self.out is None:
            raise ConfigurationError("no output writer given")
        if self.log is None:
            raise ConfigurationError("no error logger given")
        urls, err = to_urls(self.cfg.seeds)
        if err:
            raise ConfigurationError(err)
        if not urls:
            raise ConfigurationError("no crawlable sites given (only http and https are supported)")
        return urls

    async def run(self) -> CrawlStats:
        seeds = self._validate()
        fetcher: Optional[HttpFetcher] = None
        fetch = self.fetch
        if fetch is None:
            fetcher = HttpFetcher(self.cfg.user_agent, self.cfg.request_timeout_ms, self.cfg.max_redirects)
            await fetcher.start()
            fetch = fetcher.fetch
        try:
            return await self._crawl(seeds, fetch)
        finally:
            if fetcher is not None:
                await fetcher.stop()

    async def _crawl(self, seeds: List[UrlRef], fetch: Fetch) -> CrawlStats:
        assert self.out is not None and self.log is not None
        frontier = Frontier()
        sink = ResultSink(self.out, self.log)
        step = CrawlStep(
            fetch,
            self.log,
            limiter=RateLimiter(self.cfg.per_host_rps),
            verbose=self.cfg.verbose,
        )

        logger.info("crawl started seeds=%d workers=%d depth=%s", len(seeds), self.cfg.workers, self.cfg.seed_depth)
        frontier.start()
        sink.start()
        timer = None
        if self.cfg.timeout is not None:
            timer = asyncio.get_running_loop().call_later(self.cfg.timeout, self.stop)

        workers: List[asyncio.Task[CrawlStats]] = []
        try:
            await frontier.submit([Task(url=s.key, depth=self.cfg.seed_depth, href=s.href) for s in seeds])
            workers = [
                asyncio.create_task(self._worker(i, frontier, step, sink), name=f"crawl-worker-{i}")
                for i in range(self.cfg.workers)
            ]
            per_worker = await asyncio.gather(*workers)
            await frontier.join()
        finally:
            if timer is not None:
                timer.cancel()
            # при отмене run() снаружи воркеры и акторы фронтира не должны пережить обход
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            await frontier.shutdown()
            await sink.close()

        stats = CrawlStats(dispatched=frontier.dispatched())
        for s in per_worker:
            stats.results += s.results
            stats.errors += s.errors
            stats.skipped += s.skipped
        logger.info(
            "crawl finished dispatched=%d results=%d errors=%d skipped=%d",
            stats.dispatched,
            stats.results,
            stats.errors,
            stats.skipped,
        )
        return stats

    async def _worker(self, worker_id: int, frontier: Frontier, step: CrawlStep, sink: ResultSink) -> CrawlStats:
        assert self.log is not None
        stats = CrawlStats()
        while True:
            task = await frontier.accept()
            if task is None:
                return stats

            if self._stop_event.is_set():
                stats.skipped += 1
                await frontier.complete(task)
                continue

            logger.debug("worker=%d dequeue url=%s depth=%s", worker_id, task.url, task.depth)
            try:
                outcome = await step(task)
            except Exception as e:
                # задача всё равно должна быть закрыта, иначе счётчик фронтира не дойдёт до нуля
                logger.exception("worker=%d step-failed url=%s", worker_id, task.url)
                outcome = StepOutcome(error=CrawlError(task.display, f"failed to crawl {task.display}: {e!r}", task.parent))

            if outcome.error is not None:
                stats.errors += 1
                self.log.error("%s", outcome.error)
            if outcome.result is not None:
                stats.results += 1
                await sink.put(outcome.result)

            await frontier.complete(task, outcome.children)

            if self.cfg.delay:
                await asyncio.sleep(self.cfg.delay)
