"""Listing and detail of stored files. The directory is re-read on every call."""
from fastapi import APIRouter, Depends, Request

from galeria.api.schemas import ErrorResponse, ImageDetail, ImageSummary
from galeria.core.config import Settings
from galeria.core.deps import get_app_settings, get_storage, public_url
from galeria.core.errors import FileNotFound, InvalidFilename
from galeria.services.storage.base import StorageBackend
from galeria.services.upload_validation import has_accepted_extension

router = APIRouter(prefix="/imagenes", tags=["imagenes"])


def _not_found_message(allow_pdf: bool) -> str:
    return "El archivo no existe" if allow_pdf else "La imagen no existe"


@router.get("", response_model=list[ImageSummary], responses={500: {"model": ErrorResponse}})
async def list_images(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    storage: StorageBackend = Depends(get_storage),
):
    return [
        ImageSummary(nombre=name, url=public_url(request, name))
        for name in storage.list_directory()
        if has_accepted_extension(name, settings.allow_pdf)
    ]


@router.get("/{nombre}", response_model=ImageDetail, responses={404: {"model": ErrorResponse}})
async def get_image(
    nombre: str,
    request: Request,
    settings: Settings = Depends(get_app_settings),
    storage: StorageBackend = Depends(get_storage),
):
    try:
        path = storage.path_for(nombre)
    except InvalidFilename:
        raise FileNotFound(_not_found_message(settings.allow_pdf))
    if not storage.exists(nombre):
        raise FileNotFound(_not_found_message(settings.allow_pdf))
    return ImageDetail(nombre=nombre, url=public_url(request, nombre), path_local=str(path))
