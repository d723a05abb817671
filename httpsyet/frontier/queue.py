# Руководство к файлу
# Назначение: фронтир обхода на asyncio.Queue: дедупликация + определение момента, когда работы больше нет.
# Этап: базовая реализация. Обновляйте комментарий при изменениях.
# Важно: множество посещённых URL и счётчик ожидающих задач принадлежат каждый
#   своей задаче-актору; воркеры общаются с ними только через очереди.

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from httpsyet.core.types import Task
from httpsyet.frontier.dedup import Deduplicator


class Frontier:
    """Очередь URL-задач с дедупликацией и счётчиком незавершённой работы.

    Протокол счётчика:
      - submit(tasks) добавляет len(tasks);
      - complete(task, children) добавляет len(children) - 1;
      - дубликат, отброшенный мутатором, добавляет -1.
    Изменение счётчика всегда ставится в очередь раньше самих задач, поэтому
    ноль означает, что ни одной задачи нет ни в очередях, ни у воркеров.
    На нуле фронтир закрывается, и accept() начинает возвращать None.
    """

    def __init__(self, dedup: Optional[Deduplicator] = None) -> None:
        self._dedup = dedup or Deduplicator()
        self._deltas: asyncio.Queue[int] = asyncio.Queue()
        self._incoming: asyncio.Queue[Optional[Task]] = asyncio.Queue()
        self._outgoing: asyncio.Queue[Optional[Task]] = asyncio.Queue()
        self._pending = 0
        self._closed = asyncio.Event()
        self._actors: List[asyncio.Task[None]] = []
        self._log = logging.getLogger(__name__)

    @property
    def pending(self) -> int:
        return self._pending

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def dispatched(self) -> int:
        """Сколько уникальных URL было передано воркерам."""
        return self._dedup.size()

    def start(self) -> None:
        if self._actors:
            return
        self._actors = [
            asyncio.create_task(self._count_loop(), name="frontier-counter"),
            asyncio.create_task(self._dedup_loop(), name="frontier-dedup"),
        ]

    async def join(self) -> None:
        await asyncio.gather(*self._actors)

    async def shutdown(self) -> None:
        """Отменяет акторы, если фронтир ещё не закрылся сам (обход прерван)."""
        for t in self._actors:
            t.cancel()
        await asyncio.gather(*self._actors, return_exceptions=True)

    async def submit(self, tasks: Sequence[Task]) -> None:
        await self._push(len(tasks), tasks)

    async def complete(self, task: Task, children: Sequence[Task] = ()) -> None:
        """Задача обработана: одна единица работы закрыта, children — новые."""
        self._log.debug("complete url=%s children=%d", task.url, len(children))
        await self._push(len(children) - 1, children)

    async def accept(self) -> Optional[Task]:
        """Ждёт следующую непосещённую задачу. None — фронтир закрыт."""
        task = await self._outgoing.get()
        if task is None:
            # сигнал закрытия возвращаем в очередь для остальных воркеров
            self._outgoing.put_nowait(None)
        return task

    async def _push(self, delta: int, tasks: Sequence[Task]) -> None:
        await self._deltas.put(delta)
        for t in tasks:
            await self._incoming.put(t)

    async def _count_loop(self) -> None:
        while True:
            delta = await self._deltas.get()
            self._pending += delta
            if self._pending > 0:
                continue
            if self._pending < 0:
                self._log.error("pending counter went negative: %d", self._pending)
            await self._incoming.put(None)
            return

    async def _dedup_loop(self) -> None:
        while True:
            task = await self._incoming.get()
            if task is None:
                self._closed.set()
                await self._outgoing.put(None)
                return
            if self._dedup.mark(task.url):
                await self._outgoing.put(task)
            else:
                self._log.debug("skip-dup url=%s", task.url)
                await self._deltas.put(-1)
