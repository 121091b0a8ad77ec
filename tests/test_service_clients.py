import httpx
import pytest

from mise_recipes.app.core.config import get_settings
from mise_recipes.app.services.url_parsing.markdown_client import fetch_markdown
from mise_recipes.app.services.url_parsing.render_worker_client import (
    fetch_rendered_page,
    is_render_fallback_enabled,
)


@pytest.fixture
def render_worker(monkeypatch):
    monkeypatch.setenv("INGEST_RENDER_WORKER_URL", "https://render.example.com/render")
    monkeypatch.setenv("INGEST_RENDER_WORKER_TOKEN", "s3cret")
    monkeypatch.setenv("INGEST_RENDER_TIMEOUT_MS", "4000")
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_fetch_markdown_success(fake_http):
    client = fake_http(payload={"success": True, "title": " Tofu  Bowl ", "content": "# Tofu"})
    document = await fetch_markdown("https://example.com/tofu")
    assert document.title == "Tofu Bowl"
    assert document.content == "# Tofu"
    assert client.posts[0]["url"] == "https://markdown.new/"
    assert client.posts[0]["json"] == {"url": "https://example.com/tofu"}
    assert client.client_kwargs["timeout"] == 15.0


@pytest.mark.asyncio
async def test_fetch_markdown_unusable_payloads(fake_http):
    fake_http(payload={"success": False, "content": "# Tofu"})
    assert await fetch_markdown("https://example.com/tofu") is None

    fake_http(payload={"success": True, "content": None})
    assert await fetch_markdown("https://example.com/tofu") is None

    fake_http(status_code=502)
    assert await fetch_markdown("https://example.com/tofu") is None

    fake_http(json_error=True)
    assert await fetch_markdown("https://example.com/tofu") is None


@pytest.mark.asyncio
async def test_fetch_markdown_transport_error(fake_http):
    fake_http(error=httpx.ConnectError("connection refused"))
    assert await fetch_markdown("https://example.com/tofu") is None


@pytest.mark.asyncio
async def test_render_disabled_without_worker(fake_http):
    client = fake_http(payload={"html": "<html></html>"})
    assert is_render_fallback_enabled() is False
    assert await fetch_rendered_page("https://example.com") is None
    assert client.posts == []


@pytest.mark.asyncio
async def test_render_disabled_by_flag(fake_http, render_worker, monkeypatch):
    monkeypatch.setenv("INGEST_ENABLE_RENDER_FALLBACK", "false")
    get_settings.cache_clear()
    client = fake_http(payload={"html": "<html></html>"})
    assert await fetch_rendered_page("https://example.com") is None
    assert client.posts == []


@pytest.mark.asyncio
async def test_render_success(fake_http, render_worker):
    client = fake_http(
        payload={
            "finalUrl": "https://example.com/final",
            "html": "<html><body>Rendered</body></html>",
            "jsonLd": [{"@type": "Recipe"}],
        }
    )
    page = await fetch_rendered_page("https://example.com/start")
    assert page.final_url == "https://example.com/final"
    assert page.html == "<html><body>Rendered</body></html>"
    assert page.json_ld == [{"@type": "Recipe"}]
    assert client.posts[0]["headers"]["Authorization"] == "Bearer s3cret"
    assert client.client_kwargs["timeout"] == 4.0


@pytest.mark.asyncio
async def test_render_payload_defaults(fake_http, render_worker):
    fake_http(payload={"html": "<p>ok</p>", "jsonLd": "nope"})
    page = await fetch_rendered_page("https://example.com/start")
    assert page.final_url == "https://example.com/start"
    assert page.json_ld == []

    fake_http(payload={"finalUrl": "https://example.com"})
    assert await fetch_rendered_page("https://example.com/start") is None


@pytest.mark.asyncio
async def test_render_failures_return_none(fake_http, render_worker):
    fake_http(error=httpx.ReadTimeout("timed out"))
    assert await fetch_rendered_page("https://example.com") is None

    fake_http(status_code=500)
    assert await fetch_rendered_page("https://example.com") is None
