"""Error kinds surfaced as {"error": message} JSON with an HTTP status."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

NO_FILE_MESSAGE = "No se subió ningún archivo."
DIRECTORY_READ_MESSAGE = "Error al leer la carpeta"


class GaleriaError(Exception):
    """Base error: carries the status code and the client-facing message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Error interno"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NoFileProvided(GaleriaError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = NO_FILE_MESSAGE


class UnsupportedFileType(GaleriaError):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    message = "Error: Solo se permiten imágenes y PDF"


class UploadTooLarge(GaleriaError):
    status_code = 413
    message = "El archivo supera el tamaño máximo permitido"


class StorageWriteFailure(GaleriaError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Error al guardar el archivo"


class DirectoryReadFailure(GaleriaError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = DIRECTORY_READ_MESSAGE


class FileNotFound(GaleriaError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "El archivo no existe"


class InvalidFilename(ValueError):
    """Name is not a plain filename inside the storage directory."""


async def galeria_error_handler(request: Request, exc: GaleriaError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.__cause__ or exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GaleriaError, galeria_error_handler)
