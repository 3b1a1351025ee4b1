"""Pytest fixtures: settings on a temp storage dir, app, async test client."""
import pytest
from httpx import ASGITransport, AsyncClient

from galeria.core.config import Settings
from galeria.main import create_app


@pytest.fixture
def make_settings(tmp_path):
    """Factory: Settings rooted at tmp_path/images with overrides, ignoring any .env."""
    def _make(**overrides) -> Settings:
        return Settings(_env_file=None, storage_dir=tmp_path / "images", **overrides)
    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def storage_dir(settings):
    return settings.storage_dir


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def images_only_client(make_settings):
    """Client for the images-only variant (no PDF)."""
    app = create_app(make_settings(allow_pdf=False))
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
