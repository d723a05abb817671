# Руководство к файлу
# Назначение: дедупликация посещённых URL (set по каноническому URL).
# Этап: базовая реализация. Обновляйте комментарий при изменениях.
# Важно: экземпляр принадлежит одной задаче-мутатору фронтира, снаружи не трогается.

from __future__ import annotations

from typing import Set


class Deduplicator:
    """Дедупликатор URL по нормализованной строке."""

    def __init__(self) -> None:
        self._visited: Set[str] = set()

    def seen(self, url: str) -> bool:
        return url in self._visited

    def mark(self, url: str) -> bool:
        """Отмечает URL посещённым. Возвращает False, если он уже был."""
        if url in self._visited:
            return False
        self._visited.add(url)
        return True

    def size(self) -> int:
        return len(self._visited)
