# Руководство к файлу (httpsyet/__init__.py)
# Назначение:
# - Объявляет пакет httpsyet и экспортирует основные сущности краулера
#   (конфигурация, краулер, типы результатов, ошибки, загрузчик).

from __future__ import annotations

__version__ = "0.1.0"

from .core.config import CrawlConfig, DEFAULT_PARALLEL
from .core.errors import ConfigurationError, SinkError
from .core.types import CrawlError, CrawlStats, FetchResult, Result, Task
from .fetch.http_fetcher import HttpFetcher
from .orchestrator.crawler import Crawler

__all__ = [
    "__version__",
    "CrawlConfig",
    "DEFAULT_PARALLEL",
    "ConfigurationError",
    "SinkError",
    "CrawlError",
    "CrawlStats",
    "FetchResult",
    "Result",
    "Task",
    "HttpFetcher",
    "Crawler",
]
