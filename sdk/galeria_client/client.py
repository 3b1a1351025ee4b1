"""
Python client for the Galeria API: upload, list_images, get_image.
Uploads retry transport errors and 5xx responses with exponential backoff; 4xx are raised at once.
"""
import mimetypes
import time
from pathlib import Path

import httpx


class GaleriaClient:
    """Client for the upload/listing endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._session: httpx.Client | None = None

    def _get_session(self) -> httpx.Client:
        if self._session is None:
            self._session = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._session

    def upload(
        self,
        path: str | Path,
        fullname: str | None = None,
        max_retries: int = 3,
    ) -> dict:
        """
        POST a local file to /api/subir. Returns { mensaje, archivo, nombre_usado, url }.
        fullname: optional display name; the server sanitizes it and keeps the file's extension.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        body = path.read_bytes()
        data = {"fullname": fullname} if fullname else None
        last_err: Exception | None = None
        for attempt in range(max_retries):
            try:
                r = self._get_session().post(
                    "/api/subir",
                    data=data,
                    files={"foto": (path.name, body, content_type)},
                )
                r.raise_for_status()
                return r.json()
            except httpx.HTTPStatusError as e:
                if e.response.status_code < 500:
                    raise
                last_err = e
            except httpx.TransportError as e:
                last_err = e
            if attempt < max_retries - 1:
                backoff = (2**attempt) + (time.time() % 1)  # exponential backoff + jitter
                time.sleep(backoff)
        if last_err:
            raise last_err
        raise ValueError("max_retries must be at least 1")

    def list_images(self) -> list[dict]:
        """Return [{ nombre, url }, ...] for stored files with accepted extensions."""
        r = self._get_session().get("/api/imagenes")
        r.raise_for_status()
        return r.json()

    def get_image(self, nombre: str) -> dict:
        """Return { nombre, url, path_local }. Raises httpx.HTTPStatusError (404) if missing."""
        r = self._get_session().get(f"/api/imagenes/{nombre}")
        r.raise_for_status()
        return r.json()

    def close(self) -> None:
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "GaleriaClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def error_message(exc: httpx.HTTPStatusError) -> str:
    """Server-side {"error": ...} text when present, else the status line."""
    try:
        return exc.response.json()["error"]
    except (ValueError, KeyError, TypeError):
        return f"{exc.response.status_code} {exc.response.reason_phrase}"
