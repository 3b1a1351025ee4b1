"""Storage backend factory: local disk rooted at the configured storage directory."""
from galeria.core.config import Settings
from galeria.services.storage.base import StorageBackend
from galeria.services.storage.local import LocalStorage


def get_storage(settings: Settings) -> StorageBackend:
    """Return the storage backend for settings.storage_dir."""
    return LocalStorage(settings.storage_dir)


__all__ = ["LocalStorage", "StorageBackend", "get_storage"]
