# Руководство к файлу
# Назначение: единственная точка записи результатов в выходной поток (одна строка на результат).
# Этап: базовая реализация. Обновляйте комментарий при изменениях.

from __future__ import annotations

import asyncio
import logging
from typing import Optional, TextIO

from httpsyet.core.types import Result


class ResultSink:
    """Очередь результатов и одна задача, которая пишет их в out по порядку поступления.

    Поток вывода не обязан быть безопасным для конкурентной записи.
    Ошибки записи уходят в логгер ошибок и не прерывают обход.
    """

    def __init__(self, out: TextIO, log: logging.Logger) -> None:
        self._out = out
        self._log = log
        self._queue: asyncio.Queue[Optional[Result]] = asyncio.Queue()
        self._task: Optional[asyncio.Task[None]] = None
        self.written = 0
        self.failed = 0

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._drain(), name="result-sink")

    async def put(self, result: Result) -> None:
        await self._queue.put(result)

    async def close(self) -> None:
        """Дописывает всё, что уже в очереди, и останавливает писателя."""
        await self._queue.put(None)
        if self._task is not None:
            await self._task
            self._task = None

    async def _drain(self) -> None:
        while True:
            result = await self._queue.get()
            if result is None:
                return
            line = str(result)
            try:
                self._out.write(line + "\n")
            except Exception as e:
                # писатель не должен умереть: иначе очередь перестанет разбираться
                self.failed += 1
                self._log.error("failed to write output '%s': %s", line, e)
            else:
                self.written += 1
