"""Pydantic response schemas. Field names are part of the public JSON contract."""
from pydantic import BaseModel, ConfigDict


def _config_forbid(**kwargs):
    return ConfigDict(extra="forbid", **kwargs)


class UploadResponse(BaseModel):
    model_config = _config_forbid()
    mensaje: str
    archivo: str
    nombre_usado: str
    url: str


class ImageSummary(BaseModel):
    model_config = _config_forbid()
    nombre: str
    url: str


class ImageDetail(BaseModel):
    model_config = _config_forbid()
    nombre: str
    url: str
    path_local: str


class ErrorResponse(BaseModel):
    model_config = _config_forbid()
    error: str
