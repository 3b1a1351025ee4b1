"""Python client and CLI for the Galeria upload service."""
from .client import GaleriaClient

__all__ = ["GaleriaClient"]
