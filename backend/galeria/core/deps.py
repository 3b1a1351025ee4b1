"""FastAPI dependencies: app settings, storage backend, public URLs."""
from urllib.parse import quote

from fastapi import Request

from galeria.core.config import Settings
from galeria.services.storage.base import StorageBackend

STATIC_PREFIX = "/imagenes"


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with (not the env-cached ones)."""
    return request.app.state.settings


def get_storage(request: Request) -> StorageBackend:
    return request.app.state.storage


def public_url(request: Request, filename: str) -> str:
    """Absolute URL under which the static mount serves filename."""
    base = str(request.base_url).rstrip("/")
    return f"{base}{STATIC_PREFIX}/{quote(filename)}"
