"""Shared pytest fixtures for gallery carousel tests."""

import pytest

from src.core.carousel_logic import CarouselController
from src.core.gallery import GalleryItem
from tests.mocks.providers import (
    ManualTimerFactory,
    MockGallerySource,
    MockHostPage,
    make_items,
)

# Async tests opt in with @pytest.mark.asyncio (asyncio_mode = "strict")
pytest_plugins = ["pytest_asyncio"]


@pytest.fixture
def items() -> list[GalleryItem]:
    """Provide five distinct gallery items.

    Returns:
        list[GalleryItem]: Items with ids item-0 .. item-4.
    """
    return make_items(5)


@pytest.fixture
def timers() -> ManualTimerFactory:
    """Provide a timer factory whose timers fire only on demand.

    Returns:
        ManualTimerFactory: Pass as ``timer_factory`` to the scheduler,
            controller or widget.
    """
    return ManualTimerFactory()


@pytest.fixture
def controller(timers: ManualTimerFactory) -> CarouselController:
    """Provide a controller wired to manual timers, not yet loaded.

    Example:
        def test_something(controller, items, timers):
            controller.load(items)
            timers.fire()
            assert controller.state.current_index == 1
    """
    return CarouselController(timer_factory=timers)


@pytest.fixture
def mock_source(items: list[GalleryItem]) -> MockGallerySource:
    """Provide a gallery source returning the five default items."""
    return MockGallerySource(items=items)


@pytest.fixture
def mock_host() -> MockHostPage:
    """Provide a host page that records reloads and downloads."""
    return MockHostPage()
