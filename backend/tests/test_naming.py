"""Filename derivation: sanitizer, unique suffix, resolver."""
import re

import pytest

from galeria.services import naming
from galeria.services.naming import SourceKind, extension_of, resolve, sanitize, unique_suffix

AUTO_PREFIX = re.compile(r"^\d+-\d+-")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("My Report!!", "My_Report"),
        ("  Invoice 2024  ", "Invoice_2024"),
        ("a \t\n b", "a_b"),
        ("keep-this_one", "keep-this_one"),
        ("café crème", "caf_crme"),
        ("../../etc/passwd", "etcpasswd"),
        ("a - b", "a_-_b"),
    ],
)
def test_sanitize(raw, expected):
    assert sanitize(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "!!!", "¿¡?", "/\\.:*"])
def test_sanitize_to_empty(raw):
    assert sanitize(raw) == ""


def test_sanitize_output_charset():
    samples = ["héllo wörld", "tab\tand\nnewline", "<script>alert(1)</script>", "ñ_ñ-ñ", "日本語 name"]
    for s in samples:
        assert re.fullmatch(r"[A-Za-z0-9_-]*", sanitize(s))


def test_sanitize_collapses_whitespace_only():
    out = sanitize("a   b\t\t c")
    assert out == "a_b_c"
    assert not re.search(r"\s", out)
    # Existing underscores next to whitespace are kept, not merged
    assert sanitize("a_ b") == "a__b"


@pytest.mark.parametrize(
    "filename,ext",
    [
        ("photo.JPG", ".JPG"),
        ("a.b.tar.gz", ".gz"),
        ("noext", ""),
        (".bashrc", ""),
        ("scan.pdf", ".pdf"),
    ],
)
def test_extension_of(filename, ext):
    assert extension_of(filename) == ext


def test_unique_suffix_format():
    assert re.fullmatch(r"\d+-\d+", unique_suffix())


def test_unique_suffix_uses_millisecond_clock(monkeypatch):
    monkeypatch.setattr(naming.time, "time_ns", lambda: 1_700_000_000_123_456_789)
    monkeypatch.setattr(naming.random, "randint", lambda a, b: 42)
    assert unique_suffix() == "1700000000123-42"


def test_resolve_custom_name():
    r = resolve("My Report!!", "doc.pdf")
    assert r.filename == "My_Report.pdf"
    assert r.source_kind is SourceKind.CUSTOM_NAMED


def test_resolve_custom_name_keeps_original_extension_case():
    assert resolve("Holiday", "IMG_001.JPEG").filename == "Holiday.JPEG"


def test_resolve_custom_name_last_dot_extension():
    assert resolve("bundle", "a.b.tar.gz").filename == "bundle.gz"


def test_resolve_auto_name():
    r = resolve(None, "photo.JPG")
    assert AUTO_PREFIX.match(r.filename)
    assert r.filename.endswith("-photo.JPG")
    assert r.source_kind is SourceKind.AUTO_NAMED


@pytest.mark.parametrize("custom", ["", "   ", "!!!"])
def test_resolve_unusable_custom_name_falls_back_to_auto(custom):
    r = resolve(custom, "x.png")
    assert r.source_kind is SourceKind.AUTO_NAMED
    assert AUTO_PREFIX.match(r.filename)
    assert r.filename.endswith("-x.png")
    assert r.filename != ".png"


def test_resolve_auto_name_keeps_original_verbatim():
    assert resolve(None, "my photo (1).png").filename.endswith("-my photo (1).png")


def test_resolve_auto_name_sanitized_when_requested():
    r = resolve(None, "my photo (1).png", sanitize_original=True)
    assert AUTO_PREFIX.match(r.filename)
    assert r.filename.endswith("-my_photo_1.png")


def test_resolve_auto_name_sanitized_empty_stem():
    assert resolve(None, "¿¿.png", sanitize_original=True).filename.endswith("-archivo.png")


def test_resolve_max_length_truncates_stem_only():
    r = resolve("abcdefghijklmnop", "x.webp", max_length=10)
    assert r.filename == "abcdefghij.webp"


def test_resolve_same_custom_name_collides():
    assert resolve("Logo", "a.png").filename == resolve("Logo", "b.png").filename


def test_resolve_max_length_caps_auto_name_stem():
    r = resolve(None, "a" * 240 + ".png", max_length=100)
    assert AUTO_PREFIX.match(r.filename)
    assert r.filename.endswith("-" + "a" * 100 + ".png")
    assert len(r.filename) < 255


def test_resolve_max_length_applies_after_sanitizing_auto_name():
    r = resolve(None, "my photo " * 20 + ".jpg", max_length=8, sanitize_original=True)
    assert r.filename.endswith("-my_photo.jpg")
