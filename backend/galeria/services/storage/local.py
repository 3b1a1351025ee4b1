"""Local disk storage: temp file + os.replace so listings never see partial uploads."""
import logging
import os
import uuid
from pathlib import Path
from typing import BinaryIO

from galeria.core.errors import DirectoryReadFailure, InvalidFilename, UploadTooLarge
from galeria.services.storage.base import StorageBackend

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MiB
TEMP_PREFIX = ".upload-"
TEMP_SUFFIX = ".part"


class LocalStorage(StorageBackend):
    """Directory on local disk. The root is resolved once at construction."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).expanduser().resolve()

    @property
    def root(self) -> Path:
        return self._root

    def ensure_directory(self) -> None:
        if not self._root.is_dir():
            self._root.mkdir(parents=True, exist_ok=True)
            logger.info("Created storage directory %s", self._root)

    def path_for(self, name: str) -> Path:
        if not name or name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
            raise InvalidFilename(f"Not a plain filename: {name!r}")
        path = self._root / name
        if path.resolve().parent != self._root:
            raise InvalidFilename(f"Outside storage directory: {name!r}")
        return path

    def write_file(self, name: str, stream: BinaryIO, max_bytes: int | None = None) -> Path:
        dest = self.path_for(name)
        tmp = self._root / f"{TEMP_PREFIX}{uuid.uuid4().hex}{TEMP_SUFFIX}"
        size = 0
        try:
            with tmp.open("wb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if max_bytes is not None and size > max_bytes:
                        raise UploadTooLarge()
                    out.write(chunk)
            os.replace(tmp, dest)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d bytes to %s", size, dest)
        return dest

    def list_directory(self) -> list[str]:
        try:
            return os.listdir(self._root)
        except OSError as e:
            raise DirectoryReadFailure() from e

    def exists(self, name: str) -> bool:
        try:
            return self.path_for(name).is_file()
        except InvalidFilename:
            return False
