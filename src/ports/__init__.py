"""Ports (interfaces) for the application.

This module contains Protocol definitions that define the boundaries between
the carousel core and external systems (the gallery data service and the
hosting page).
"""

from src.ports.gallery import GallerySource, HostPage

__all__ = [
    "GallerySource",
    "HostPage",
]
