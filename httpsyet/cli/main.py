# Руководство к файлу
# Назначение: CLI: параметры запуска (сайты, глубина, параллельность, задержка), вызов краулера,
#   опциональная отправка результатов в webhook.
# Этап: расширенная реализация. Значения по умолчанию берутся из переменных окружения HTTPSYET_*.
# Обновляйте комментарий при изменениях.

from __future__ import annotations

import argparse
import asyncio
import io
import platform
import sys
from typing import List, Optional, Sequence, TextIO

from httpsyet import __version__
from httpsyet.core.config import DEFAULT_PARALLEL, CrawlConfig
from httpsyet.core.errors import ConfigurationError, SinkError
from httpsyet.core.logging import configure_logging, make_error_logger
from httpsyet.core.settings import Settings, get_settings
from httpsyet.notify.slack_format import format_message
from httpsyet.notify.slackhook import SlackData, post_custom
from httpsyet.orchestrator.crawler import Crawler

DESCRIPTION = """Find links you can update to HTTPS.

Sites are crawled recursively. Each external http:// link is checked
to see if it can be replaced with https://. If a link can be replaced
it is written to stdout, prefixed with the page it has been found on:

    https://mysite.com http://google.com
    https://mysite.com/contact http://facebook.com

Errors (broken links, unreachable pages) are reported on stderr.
"""

EPILOG = "'httpsyet --parallel 5 --delay 1' means every worker waits one second between requests."


class _Tee:
    """Пишет одну и ту же строку в несколько потоков."""

    def __init__(self, *streams: TextIO) -> None:
        self._streams = streams

    def write(self, s: str) -> int:
        for st in self._streams:
            st.write(s)
        return len(s)

    def flush(self) -> None:
        for st in self._streams:
            st.flush()


def build_parser(settings: Optional[Settings] = None) -> argparse.ArgumentParser:
    s = settings or get_settings()
    p = argparse.ArgumentParser(
        prog="httpsyet",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("urls", nargs="*", metavar="url", help="Один или несколько URL для обхода")
    p.add_argument("--depth", type=int, default=0, help="Сколько уровней страниц обходить; 0 — без ограничения")
    p.add_argument("--parallel", type=int, default=DEFAULT_PARALLEL, help="Число параллельных воркеров")
    p.add_argument("--delay", type=float, default=1.0, help="Пауза воркера между запросами, сек")
    p.add_argument("--per-host-rps", type=float, default=None, help="Лимит запросов в секунду на один хост")
    p.add_argument("--timeout", type=float, default=None, help="Остановить обход через N секунд")
    p.add_argument("--verbose", action=argparse.BooleanOptionalAction, default=False, help="Писать каждый GET в stderr")
    p.add_argument("--slack", type=str, default=s.slack_webhook, help="Incoming webhook: результаты дополнительно отправляются туда")
    p.add_argument("--slack-username", type=str, default=s.slack_username)
    p.add_argument("--slack-channel", type=str, default=s.slack_channel)
    p.add_argument("--slack-icon", type=str, default=s.slack_icon_emoji)
    p.add_argument("--user-agent", type=str, default=s.user_agent)
    p.add_argument("--request-timeout-ms", type=int, default=s.request_timeout_ms)
    p.add_argument("--log-level", type=str, default=s.log_level, help="Уровень логирования (DEBUG/INFO/WARNING/ERROR)")
    p.add_argument("--log-json", action=argparse.BooleanOptionalAction, default=s.log_json, help="JSON-логирование")
    p.add_argument("--version", action="store_true", help="Показать версию и выйти")
    return p


async def main_async(ns: argparse.Namespace, stdout: TextIO = sys.stdout, stderr: TextIO = sys.stderr) -> int:
    configure_logging(level=ns.log_level, json=ns.log_json)

    out_buf = io.StringIO()
    err_buf = io.StringIO()
    out: TextIO = stdout
    err_streams: List[TextIO] = [stderr]
    if ns.slack:
        out = _Tee(stdout, out_buf)  # type: ignore[assignment]
        err_streams.append(err_buf)
    errs = make_error_logger(err_streams)

    cfg = CrawlConfig(
        seeds=list(ns.urls),
        depth=ns.depth,
        parallel=ns.parallel,
        delay=ns.delay,
        per_host_rps=ns.per_host_rps,
        user_agent=ns.user_agent,
        request_timeout_ms=ns.request_timeout_ms,
        verbose=ns.verbose,
        timeout=ns.timeout,
    )
    try:
        await Crawler(cfg, out=out, log=errs).run()
    except ConfigurationError as e:
        stderr.write(f"failed to crawl: {e}\n")
        return 1

    if not ns.slack:
        return 0

    data = SlackData(
        text=format_message(out_buf.getvalue(), err_buf.getvalue()),
        username=ns.slack_username,
        channel=ns.slack_channel,
        icon_emoji=ns.slack_icon,
    )
    try:
        await post_custom(ns.slack, data)
    except SinkError as e:
        errs.error("failed posting to Slack: %s", e)
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    ns = parser.parse_args(argv)
    if ns.version:
        print(f"httpsyet {__version__} {platform.system().lower()} {platform.machine()}")
        sys.exit(0)
    if not ns.urls:
        parser.print_help(sys.stderr)
        sys.exit(1)
    sys.exit(asyncio.run(main_async(ns)))


if __name__ == "__main__":
    main()
