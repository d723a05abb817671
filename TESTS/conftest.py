# Руководство к файлу (TESTS/conftest.py)
# Назначение:
# - Общие фикстуры для pytest-тестов httpsyet.
# - FakeWeb: «интернет» в памяти вместо HTTP, считает каждый запрос по URL.
# - Логгер ошибок обхода с записью в буфер.

from __future__ import annotations

import io
import uuid
from collections import Counter
from typing import Dict, Optional, Tuple

import pytest

from httpsyet.core.logging import make_error_logger
from httpsyet.core.types import FetchResult

HTML = "text/html; charset=utf-8"


class FakeWeb:
    """Функция загрузки для краулера поверх словаря страниц.

    Неизвестный URL отвечает 404. Редирект считается запросом и к исходному URL, и к цели.
    """

    def __init__(self) -> None:
        self._pages: Dict[str, Tuple[int, str, Optional[str]]] = {}
        self._redirects: Dict[str, str] = {}
        self._failures: Dict[str, str] = {}
        self.calls: Counter[str] = Counter()

    @staticmethod
    def links(*hrefs: str) -> str:
        """HTML-страница со ссылками в заданном порядке."""

        body = "\n".join(f'<a href="{h}">link</a>' for h in hrefs)
        return f"<!DOCTYPE html><html><head><title>Page</title></head><body>{body}</body></html>"

    def page(self, url: str, html: str = "", *, status: int = 200, content_type: Optional[str] = HTML) -> None:
        self._pages[url] = (status, html, content_type)

    def redirect(self, url: str, target: str) -> None:
        self._redirects[url] = target

    def fail(self, url: str, error: str = "connection refused") -> None:
        self._failures[url] = error

    async def fetch(self, url: str) -> FetchResult:
        self.calls[url] += 1
        if url in self._failures:
            return FetchResult(url=url, final_url=None, status=0, error=self._failures[url])
        final = url
        if url in self._redirects:
            final = self._redirects[url]
            self.calls[final] += 1
        status, html, ctype = self._pages.get(final, (404, "", HTML))
        return FetchResult(url=url, final_url=final, status=status, content_type=ctype, body=html.encode("utf-8"))


class ErrorLog:
    """Логгер ошибок обхода + буфер, куда он пишет."""

    def __init__(self) -> None:
        self.buffer = io.StringIO()
        self.logger = make_error_logger([self.buffer], name=f"httpsyet.errors.test.{uuid.uuid4().hex}")

    def lines(self) -> list[str]:
        return [ln for ln in self.buffer.getvalue().splitlines() if ln]


@pytest.fixture
def web() -> FakeWeb:
    return FakeWeb()


@pytest.fixture
def errlog() -> ErrorLog:
    return ErrorLog()


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()
