"""Mock implementations for testing."""

from tests.mocks.providers import (
    FailingGallerySource,
    ManualTimerFactory,
    MockGallerySource,
    MockHostPage,
    make_items,
)

__all__ = [
    "FailingGallerySource",
    "ManualTimerFactory",
    "MockGallerySource",
    "MockHostPage",
    "make_items",
]
