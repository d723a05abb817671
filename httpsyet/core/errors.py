# Руководство к файлу
# Назначение: исключения пакета (ошибки конфигурации и ошибки выходных приёмников).
# Этап: базовая реализация. Обновляйте комментарий при изменениях.

from __future__ import annotations


class ConfigurationError(Exception):
    """Некорректная конфигурация запуска; обход не начинается."""


class SinkError(Exception):
    """Не удалось записать/отправить результаты (вывод, webhook)."""
