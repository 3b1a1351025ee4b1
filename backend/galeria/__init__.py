"""Galeria: file upload and listing service."""

__version__ = "0.1.0"
