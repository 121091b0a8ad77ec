import pytest

from mise_recipes.app.core.config import get_settings

INGEST_ENV_VARS = (
    "INGEST_MARKDOWN_SERVICE_URL",
    "INGEST_ENABLE_MARKDOWN",
    "INGEST_MARKDOWN_TIMEOUT_SECONDS",
    "INGEST_HTML_TIMEOUT_SECONDS",
    "INGEST_METADATA_TIMEOUT_SECONDS",
    "INGEST_RENDER_WORKER_URL",
    "INGEST_RENDER_WORKER_TOKEN",
    "INGEST_ENABLE_RENDER_FALLBACK",
    "INGEST_RENDER_TIMEOUT_MS",
    "INGEST_CONVERT_TO_METRIC",
    "SHOPPING_DEFAULT_LOCATION",
    "SCRAPER_USER_AGENT",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    # Settings read a .env from the working directory; keep tests hermetic.
    monkeypatch.chdir(tmp_path)
    for name in INGEST_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeResponse:
    def __init__(self, status_code=200, payload=None, json_error=False):
        self.status_code = status_code
        self._payload = payload
        self._json_error = json_error

    @property
    def is_success(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._json_error:
            raise ValueError("Expecting value")
        return self._payload


class FakeAsyncClient:
    """Stands in for ``httpx.AsyncClient``; records POSTs and replays one response or error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.client_kwargs = {}
        self.posts = []

    def __call__(self, **kwargs):
        self.client_kwargs = kwargs
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def post(self, url, json=None, headers=None):
        self.posts.append({"url": url, "json": json, "headers": headers or {}})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_http(monkeypatch):
    def install(status_code=200, payload=None, json_error=False, error=None):
        response = FakeResponse(status_code=status_code, payload=payload, json_error=json_error)
        client = FakeAsyncClient(response=response, error=error)
        monkeypatch.setattr("httpx.AsyncClient", client)
        return client

    return install
