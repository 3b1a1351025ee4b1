"""Upload type gate: extension and declared MIME type allowlist (images, optionally PDF)."""
from dataclasses import dataclass
from pathlib import PurePosixPath

from galeria.services.naming import extension_of

IMAGE_KINDS = ("jpeg", "jpg", "png", "gif", "webp")
PDF_KIND = "pdf"


@dataclass(frozen=True)
class Accepted:
    pass


@dataclass(frozen=True)
class Rejected:
    reason: str


def accepted_kinds(allow_pdf: bool) -> tuple[str, ...]:
    return IMAGE_KINDS + (PDF_KIND,) if allow_pdf else IMAGE_KINDS


def rejection_message(allow_pdf: bool) -> str:
    return "Error: Solo se permiten imágenes y PDF" if allow_pdf else "Error: Solo se permiten imágenes"


def original_basename(filename: str | None) -> str:
    """Client-supplied filename without any directory components ("" if missing)."""
    if not filename or not filename.strip():
        return ""
    name = PurePosixPath(filename.split("\\")[-1]).name
    return "" if name in (".", "..") else name


def has_accepted_extension(filename: str, allow_pdf: bool) -> bool:
    """Listing filter: the name ends in ``.<kind>`` for an accepted kind (case-insensitive).

    Dotfiles such as ``.png`` match too; anything placed in the directory by hand is listed by name.
    """
    _, dot, ext = filename.rpartition(".")
    return bool(dot) and ext.lower() in accepted_kinds(allow_pdf)


def check_upload(filename: str, content_type: str | None, allow_pdf: bool) -> Accepted | Rejected:
    """Both the extension and the declared MIME type must name an accepted kind.

    The extension is the one the stored name will carry, so ``.png`` alone (no extension) is refused.
    """
    kinds = accepted_kinds(allow_pdf)
    mime = (content_type or "").strip().lower()
    if not any(kind in mime for kind in kinds):
        return Rejected(f"Content type not allowed: {content_type!r}")
    ext = extension_of(filename)
    if not ext or ext[1:].lower() not in kinds:
        return Rejected(f"Extension not allowed: {filename!r}")
    return Accepted()
