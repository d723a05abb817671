# Руководство к файлу (TESTS/unit/test_step_unit.py)
# Назначение:
# - Unit-тесты для orchestrator/step.py: https-проба, ошибки загрузки, редиректы, глубина, извлечение ссылок.

from __future__ import annotations

import pytest

from httpsyet.core.types import Result, Task
from httpsyet.orchestrator.step import CrawlStep

SEED = "https://site.test/base"


@pytest.mark.asyncio
async def test_external_http_link_upgradable(web, errlog):
    web.page("https://ext.test/x", "ok")
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task("http://ext.test/x", parent=SEED))

    assert outcome.result == Result(page=SEED, link="http://ext.test/x")
    assert str(outcome.result) == f"{SEED} http://ext.test/x"
    assert outcome.children == ()
    assert outcome.error is None
    # небезопасную версию не грузим вовсе
    assert web.calls["http://ext.test/x"] == 0
    assert web.calls["https://ext.test/x"] == 1


@pytest.mark.asyncio
async def test_external_http_link_probe_fails_falls_back(web, errlog):
    web.page("https://down.test/y", status=500)
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task("http://down.test/y", parent=SEED))

    assert outcome.result is None
    assert outcome.children == ()
    assert str(outcome.error) == f"404 http://down.test/y on page {SEED}"
    assert web.calls["https://down.test/y"] == 1
    assert web.calls["http://down.test/y"] == 1


@pytest.mark.asyncio
async def test_probe_transport_error_falls_back_to_http(web, errlog):
    web.fail("https://plain.test/z", "ssl handshake failed")
    web.page("http://plain.test/z", web.links("/more"))
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task("http://plain.test/z", parent=SEED))

    # внешняя страница жива, но не разбирается
    assert outcome.result is None
    assert outcome.error is None
    assert outcome.children == ()
    assert web.calls["http://plain.test/z"] == 1


@pytest.mark.asyncio
async def test_internal_http_link_is_not_probed(web, errlog):
    web.page("http://site.test/a", web.links("/b"))
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task("http://site.test/a", parent="http://site.test/"))

    assert outcome.result is None
    assert [c.url for c in outcome.children] == ["http://site.test/b"]
    assert web.calls["https://site.test/a"] == 0


@pytest.mark.asyncio
async def test_external_https_link_is_only_checked(web, errlog):
    web.page("https://ext.test/secure", web.links("/deeper"))
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task("https://ext.test/secure", parent=SEED))

    assert outcome.result is None
    assert outcome.error is None
    assert outcome.children == ()
    assert sum(web.calls.values()) == 1


@pytest.mark.asyncio
async def test_transport_failure_is_crawl_error(web, errlog):
    web.fail("https://site.test/gone", "connection refused")
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task("https://site.test/gone", parent=SEED))

    assert str(outcome.error) == f"failed to get https://site.test/gone: connection refused on page {SEED}"
    assert outcome.children == ()


@pytest.mark.asyncio
async def test_seed_error_has_no_parent(web, errlog):
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task(SEED))

    assert str(outcome.error) == f"404 {SEED}"


@pytest.mark.asyncio
async def test_redirect_to_other_host_stops_extraction(web, errlog):
    web.redirect("https://site.test/redirect", "http://other.test/target")
    web.page("http://other.test/target", web.links("/no-follow"))
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task("https://site.test/redirect", parent=SEED))

    assert outcome.children == ()
    assert outcome.error is None


@pytest.mark.asyncio
async def test_redirect_within_site_resolves_links_against_final_url(web, errlog):
    web.redirect("https://site.test/docs", "https://site.test/docs/")
    web.page("https://site.test/docs/", web.links("intro"))
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task("https://site.test/docs", parent=SEED))

    assert [c.url for c in outcome.children] == ["https://site.test/docs/intro"]
    assert outcome.children[0].parent == "https://site.test/docs"


@pytest.mark.asyncio
async def test_depth_one_fetches_but_does_not_extract(web, errlog):
    web.page(SEED, web.links("/a", "/b"))
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task(SEED, depth=1))

    assert outcome.children == ()
    assert web.calls[SEED] == 1


@pytest.mark.asyncio
async def test_children_get_decremented_depth_and_skip_unsupported_schemes(web, errlog):
    web.page(
        SEED,
        web.links("/a", "mailto:hi@site.test", "javascript:alert('hi')", "http://ext.test/x", "/a#frag"),
    )
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task(SEED, depth=3))

    assert [(c.url, c.depth, c.parent) for c in outcome.children] == [
        ("https://site.test/a", 2, SEED),
        ("http://ext.test/x", 2, SEED),
        ("https://site.test/a", 2, SEED),
    ]
    # неподдерживаемые схемы не считаются ошибками
    assert outcome.error is None


@pytest.mark.asyncio
async def test_invalid_discovered_links_are_reported_per_page(web, errlog):
    web.page(SEED, web.links("/ok", "http://bad.test:port/"))
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task(SEED))

    assert [c.url for c in outcome.children] == ["https://site.test/ok"]
    assert outcome.error is not None
    assert str(outcome.error).startswith(f"page {SEED}: invalid URLs: http://bad.test:port/ (")


@pytest.mark.asyncio
async def test_non_html_response_is_not_parsed(web, errlog):
    web.page("https://site.test/file.txt", '<a href="/hidden">x</a>', content_type="text/plain")
    step = CrawlStep(web.fetch, errlog.logger)

    outcome = await step(Task("https://site.test/file.txt", parent=SEED))

    assert outcome.children == ()


@pytest.mark.asyncio
async def test_verbose_logs_every_fetch_attempt(web, errlog):
    web.page("https://ext.test/x", "ok")
    step = CrawlStep(web.fetch, errlog.logger, verbose=True)

    await step(Task("http://ext.test/x", parent=SEED))

    assert errlog.lines() == ["verbose: GET https://ext.test/x"]
