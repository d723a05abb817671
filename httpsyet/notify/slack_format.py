# Руководство к файлу
# Назначение: текст уведомления из накопленного вывода краулера и его ошибок.
# Этап: базовая реализация. Обновляйте комментарий при изменениях.
# Важно: строки вывода вида "<страница> <ссылка>" переводятся в человекочитаемую фразу,
#   всё остальное пропускается как есть; пустые строки выбрасываются.

from __future__ import annotations

from typing import Iterator, List


def _lines(text: str) -> Iterator[str]:
    for line in text.splitlines():
        line = line.strip()
        if line:
            yield line


def _describe(line: str) -> str:
    parts = line.split()
    if len(parts) != 2:
        return line
    page, link = parts
    return f"You can change {link} on page {page} to https."


def format_message(output: str, errors: str) -> str:
    """Собирает текст: по строке на найденную ссылку, затем блок "Errors:", если ошибки были."""
    out: List[str] = [_describe(line) + "\n" for line in _lines(output)]
    errs = [line + "\n" for line in _lines(errors)]
    if errs:
        if out:
            out.append("\n")
        out.append("Errors:\n")
        out.extend(errs)
    return "".join(out)
