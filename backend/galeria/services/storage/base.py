"""Storage backend interface: directory setup, atomic write, existence probe, listing."""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO


class StorageBackend(ABC):
    """Abstract storage rooted at one directory; names are plain filenames inside it."""

    @property
    @abstractmethod
    def root(self) -> Path:
        """Absolute storage directory."""
        ...

    @abstractmethod
    def ensure_directory(self) -> None:
        """Create the storage directory if absent. Already existing is success."""
        ...

    @abstractmethod
    def path_for(self, name: str) -> Path:
        """Absolute path for name. Raise InvalidFilename if it is not a plain filename."""
        ...

    @abstractmethod
    def write_file(self, name: str, stream: BinaryIO, max_bytes: int | None = None) -> Path:
        """Persist stream under name, overwriting. Raise UploadTooLarge past max_bytes."""
        ...

    @abstractmethod
    def list_directory(self) -> list[str]:
        """Entry names in directory order. Raise DirectoryReadFailure on I/O errors."""
        ...

    @abstractmethod
    def exists(self, name: str) -> bool:
        ...
