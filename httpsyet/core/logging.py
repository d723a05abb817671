# Руководство к файлу
# Назначение: настройка логирования проекта (уровень, формат, вывод в файл/STDERR) и логгер ошибок обхода.
# Этап: базовая реализация. Обновляйте комментарий при изменениях.
# Важно: STDOUT занят результатами, поэтому диагностика пишется в STDERR.

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import IO, Iterable, Optional

import orjson

ERROR_LOGGER = "httpsyet.errors"


class JsonFormatter(logging.Formatter):
    """JSON-форматтер на orjson: одна запись — одна строка."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        payload = {
            "ts": ts,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        return orjson.dumps(payload).decode("utf-8")


def configure_logging(level: str = "WARNING", *, to_file: Optional[str] = None, json: bool = False) -> None:
    if to_file:
        h: logging.Handler = logging.FileHandler(to_file, encoding="utf-8")
    else:
        h = logging.StreamHandler(sys.stderr)
    if json:
        fmt: logging.Formatter = JsonFormatter()
    else:
        fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    h.setFormatter(fmt)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.addHandler(h)

    # снизим шум от внешних библиотек
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def make_error_logger(streams: Iterable[IO[str]], name: str = ERROR_LOGGER) -> logging.Logger:
    """Логгер-приёмник ошибок обхода: только текст сообщения, без префиксов.

    Не пробрасывает записи в root, чтобы ошибки не дублировались в диагностике.
    """

    lg = logging.getLogger(name)
    for old in list(lg.handlers):
        lg.removeHandler(old)
    for stream in streams:
        h = logging.StreamHandler(stream)
        h.setFormatter(logging.Formatter("%(message)s"))
        lg.addHandler(h)
    lg.setLevel(logging.INFO)
    lg.propagate = False
    return lg
