# Руководство к файлу
# Назначение: извлечение ссылок из HTML (a[href]), быстрый парсер Selectolax (движок Lexbor).
# Этап: базовая реализация. Обновляйте комментарий при изменениях.

from __future__ import annotations

from typing import List, Union

from selectolax.lexbor import LexborHTMLParser


class LinkExtractor:
    """Извлечение href из тегов <a> в порядке появления в документе."""

    @staticmethod
    def extract_hrefs(html: Union[str, bytes]) -> List[str]:
        tree = LexborHTMLParser(html)
        hrefs: List[str] = []
        for node in tree.css("a[href]"):
            href = (node.attributes.get("href") or "").strip()
            if href:
                hrefs.append(href)
        return hrefs
