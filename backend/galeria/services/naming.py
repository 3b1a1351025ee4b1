"""Stored filename derivation: custom-name sanitization, auto-naming suffix, resolution.

Custom names are sanitized to ``[A-Za-z0-9_-]`` and keep the original extension.
Uploads without a usable custom name get ``<ms-epoch>-<random>-<original filename>``.
Two uploads with the same custom name and extension resolve to the same name;
the later write overwrites the earlier one. No existence check is made here.
"""
import os
import random
import re
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

_WHITESPACE_RUN = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^A-Za-z0-9_-]")
_RANDOM_MAX = 10**9


class SourceKind(str, Enum):
    CUSTOM_NAMED = "custom"
    AUTO_NAMED = "auto"


@dataclass(frozen=True)
class ResolvedName:
    filename: str
    source_kind: SourceKind


@dataclass(frozen=True)
class StoredFile:
    stored_filename: str
    absolute_path: Path
    source_kind: SourceKind


def sanitize(raw: str) -> str:
    """Trim, collapse whitespace runs to ``_``, drop anything outside ``[A-Za-z0-9_-]``.

    Returns "" when nothing usable is left; callers treat that as no custom name.
    """
    trimmed = raw.strip()
    if not trimmed:
        return ""
    return _DISALLOWED.sub("", _WHITESPACE_RUN.sub("_", trimmed))


def extension_of(filename: str) -> str:
    """Extension from the last dot, dot included and case preserved ("" if none)."""
    return os.path.splitext(filename)[1]


def unique_suffix() -> str:
    """``<millisecond epoch>-<random int>``. Collision-resistant, not collision-proof."""
    return f"{time.time_ns() // 1_000_000}-{random.randint(0, _RANDOM_MAX)}"


def resolve(
    custom_name: str | None,
    original_filename: str,
    *,
    max_length: int | None = None,
    sanitize_original: bool = False,
) -> ResolvedName:
    """Pick the stored filename for an upload.

    A custom name that sanitizes to something non-empty wins. Otherwise the
    name is auto-generated and the original filename appended verbatim, unless
    ``sanitize_original`` is set. On both paths the stem is truncated to
    ``max_length`` characters and the extension kept.
    """
    ext = extension_of(original_filename)
    clean = sanitize(custom_name) if custom_name else ""
    if clean:
        if max_length:
            clean = clean[:max_length]
        return ResolvedName(f"{clean}{ext}", SourceKind.CUSTOM_NAMED)

    stem = original_filename[: len(original_filename) - len(ext)]
    if sanitize_original:
        stem = sanitize(stem) or "archivo"
    if max_length:
        stem = stem[:max_length]
    return ResolvedName(f"{unique_suffix()}-{stem}{ext}", SourceKind.AUTO_NAMED)
