"""Upload: multipart `foto` file plus optional `fullname` display name.

The form is read directly so that a missing, empty or non-file `foto` field
ends in the 400 error body rather than a validation error.
"""
import logging

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from galeria.api.schemas import ErrorResponse, UploadResponse
from galeria.core.config import Settings
from galeria.core.deps import get_app_settings, get_storage, public_url
from galeria.core.errors import NoFileProvided, StorageWriteFailure, UnsupportedFileType, UploadTooLarge
from galeria.core.metrics import record_upload
from galeria.services.naming import StoredFile, resolve
from galeria.services.storage.base import StorageBackend
from galeria.services.upload_validation import Rejected, check_upload, original_basename, rejection_message

router = APIRouter(tags=["uploads"])
logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Archivo guardado con éxito"


@router.post(
    "/subir",
    response_model=UploadResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload_file(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    storage: StorageBackend = Depends(get_storage),
):
    async with request.form() as form:
        foto = form.get("foto")
        fullname = form.get("fullname")
        if not isinstance(fullname, str):
            fullname = None

        original = original_basename(foto.filename) if isinstance(foto, UploadFile) else ""
        if not original:
            record_upload("no_file")
            raise NoFileProvided()

        verdict = check_upload(original, foto.content_type, settings.allow_pdf)
        if isinstance(verdict, Rejected):
            record_upload("rejected")
            logger.info("Upload rejected: %s", verdict.reason)
            raise UnsupportedFileType(rejection_message(settings.allow_pdf))

        resolved = resolve(
            fullname,
            original,
            max_length=settings.max_name_length or None,
            sanitize_original=settings.sanitize_auto_names,
        )
        try:
            path = await run_in_threadpool(storage.write_file, resolved.filename, foto.file, settings.max_upload_bytes)
        except UploadTooLarge:
            record_upload("too_large")
            logger.info("Upload too large: %s (limit %s MB)", original, settings.max_upload_mb)
            raise
        except OSError as e:
            record_upload("failed")
            logger.error("Could not store %s: %s", resolved.filename, e)
            raise StorageWriteFailure() from e

    stored = StoredFile(stored_filename=resolved.filename, absolute_path=path, source_kind=resolved.source_kind)
    record_upload("stored")
    logger.info("Stored %s (%s name) at %s", stored.stored_filename, stored.source_kind.value, stored.absolute_path)

    return UploadResponse(
        mensaje=SUCCESS_MESSAGE,
        archivo=stored.stored_filename,
        nombre_usado=stored.stored_filename,
        url=public_url(request, stored.stored_filename),
    )
