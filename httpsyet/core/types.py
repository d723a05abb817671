# Руководство к файлу
# Назначение: общие типы/DTO (задача фронтира, результат, ошибка обхода, ответ загрузчика).
# Этап: базовая реализация DTO. Обновляйте комментарий при изменениях.

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple


@dataclass(frozen=True)
class Task:
    """Задача для фронтира: URL с остатком глубины и родителем.

    url — канонический URL: по нему задача загружается и дедуплицируется.
    href — тот же адрес в том виде, как он записан на странице (только разрешён
    относительно базы); он попадает в результаты и сообщения об ошибках.
    depth=None означает «без ограничения»; декремент None остаётся None,
    поэтому неограниченная задача никогда не достигает depth == 1.
    """

    url: str
    parent: Optional[str] = None
    depth: Optional[int] = None
    href: Optional[str] = None

    @property
    def display(self) -> str:
        return self.href or self.url

    def child(self, url: str, href: Optional[str] = None) -> "Task":
        depth = None if self.depth is None else self.depth - 1
        return Task(url=url, parent=self.display, depth=depth, href=href)


@dataclass(frozen=True)
class Result:
    """Найденная http-ссылка, которую можно заменить на https."""

    page: str
    link: str

    def __str__(self) -> str:
        return f"{self.page} {self.link}"


@dataclass(frozen=True)
class CrawlError:
    """Ошибка обхода одной страницы (сеть, статус >= 400, разбор HTML)."""

    context: str
    cause: str
    parent: Optional[str] = None

    def __str__(self) -> str:
        if self.parent:
            return f"{self.cause} on page {self.parent}"
        return self.cause


@dataclass
class FetchResult:
    """Результат загрузки URL."""

    url: str
    final_url: Optional[str]
    status: int
    content_type: Optional[str] = None
    body: bytes = b""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and 0 < self.status < 400


Fetch = Callable[[str], Awaitable[FetchResult]]


@dataclass
class StepOutcome:
    """Итог одного шага обхода: дочерние задачи, результат и/или ошибка."""

    children: Tuple[Task, ...] = ()
    result: Optional[Result] = None
    error: Optional[CrawlError] = None


@dataclass
class CrawlStats:
    """Счётчики завершённого обхода."""

    dispatched: int = 0
    results: int = 0
    errors: int = 0
    skipped: int = 0
