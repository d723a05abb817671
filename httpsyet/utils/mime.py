# Руководство к файлу
# Назначение: решаем по Content-Type, стоит ли искать ссылки в теле ответа.
# Этап: базовая реализация. Обновляйте комментарий при изменениях.

from typing import Optional

_HTML_TYPES = frozenset({"text/html", "application/xhtml+xml"})


def is_html(content_type: Optional[str]) -> bool:
    """HTML или неизвестный тип (сервер не прислал Content-Type)."""
    if not content_type:
        return True
    mime = content_type.split(";", 1)[0].strip().lower()
    return not mime or mime in _HTML_TYPES
