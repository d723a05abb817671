# Руководство к файлу
# Назначение: нормализация/каноникализация URL, фильтр схем (http/https), разбор списка ссылок.
# Этап: базовая реализация. Обновляйте комментарий при изменениях.

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Optional, Set, Tuple
from urllib.parse import urljoin, urlsplit, urlunsplit

ALLOWED_SCHEMES: Set[str] = frozenset({"http", "https"})
DEFAULT_SCHEME = "https"

_DEFAULT_PORTS = {"http": 80, "https": 443}


class UrlRef(NamedTuple):
    """Ссылка после разбора: канонический ключ и адрес в исходном виде."""

    key: str
    href: str


def _normalize_netloc(scheme: str, netloc: str, host: str, port: Optional[int]) -> str:
    # userinfo оставляем как есть, хост — в нижнем регистре
    userinfo = ""
    if "@" in netloc:
        userinfo = netloc.rsplit("@", 1)[0] + "@"
    if ":" in host:
        host = f"[{host}]"
    # удалить порт по умолчанию
    if port is None or _DEFAULT_PORTS.get(scheme) == port:
        return f"{userinfo}{host}"
    return f"{userinfo}{host}:{port}"


def _with_default_scheme(url: str) -> str:
    if url.startswith("//"):
        return f"{DEFAULT_SCHEME}:{url}"
    return f"{DEFAULT_SCHEME}://{url}"


def resolve_url(url: str, *, base: Optional[str] = None) -> str:
    """Абсолютный URL без каноникализации: путь, регистр и фрагмент остаются как были."""
    raw = url.strip()
    if base:
        raw = urljoin(base, raw)
    if not urlsplit(raw).scheme:
        raw = _with_default_scheme(raw)
    return raw


def normalize_url(
    url: str,
    *,
    base: Optional[str] = None,
    allowed_schemes: Set[str] = ALLOWED_SCHEMES,
) -> Optional[str]:
    """Канонизирует URL.

    Возвращает None, если схема не разрешена (mailto:, javascript: и т.п.).
    Бросает ValueError, если строка не разбирается как URL или в ней нет хоста.
    Без схемы (и без base) используется https.
    """
    p = urlsplit(resolve_url(url, base=base))
    scheme = p.scheme.lower()
    if scheme not in allowed_schemes:
        return None
    host = p.hostname
    port = p.port  # ValueError при нечисловом/вне диапазона порте
    if not host:
        raise ValueError("missing host")
    netloc = _normalize_netloc(scheme, p.netloc, host, port)
    # фрагмент не влияет на загружаемую страницу
    return urlunsplit((scheme, netloc, p.path or "/", p.query, ""))


def to_urls(links: Iterable[str], *, base: Optional[str] = None) -> Tuple[List[UrlRef], Optional[str]]:
    """Оставляет только корректные http/https URL.

    Ссылки с другими схемами молча отбрасываются. Неразбираемые ссылки
    собираются в одно сообщение об ошибке: "invalid URLs: a (причина), b (причина)".
    """
    urls: List[UrlRef] = []
    invalids: List[str] = []
    for s in links:
        try:
            href = resolve_url(s, base=base)
            u = normalize_url(href)
        except ValueError as e:
            invalids.append(f"{s} ({e})")
            continue
        if u is not None:
            urls.append(UrlRef(key=u, href=href))
    err = None
    if invalids:
        err = "invalid URLs: " + ", ".join(invalids)
    return urls, err


def get_host(url: str) -> str:
    """Хост вместе с портом: два сервера на одном IP, но разных портах — разные сайты.

    Порт по умолчанию для схемы опускается, поэтому исходный и канонический вид дают один хост.
    """
    p = urlsplit(url)
    host = p.hostname or ""
    port = p.port
    if port is None or _DEFAULT_PORTS.get(p.scheme.lower()) == port:
        return host
    return f"{host}:{port}"


def get_scheme(url: str) -> str:
    return urlsplit(url).scheme.lower()


def with_scheme(url: str, scheme: str) -> str:
    p = urlsplit(url)
    return urlunsplit(p._replace(scheme=scheme))
