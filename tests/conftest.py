import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("SUITE_MAX_WORKERS", "2")

    from docid.api.deps import get_classifier
    from docid.core.settings import get_settings

    get_settings.cache_clear()
    get_classifier.cache_clear()

    from docid.main import app

    with TestClient(app) as test_client:
        yield test_client

    get_settings.cache_clear()
