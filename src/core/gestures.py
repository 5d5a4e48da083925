"""Touch swipe recognition for the carousel."""

from enum import Enum

from src.core.logging import get_logger

logger = get_logger(__name__)

SWIPE_THRESHOLD_PX = 50.0


class SwipeDirection(Enum):
    """Outcome of one completed gesture."""

    LEFT = "left"  # finger moved right-to-left: show the next slide
    RIGHT = "right"  # finger moved left-to-right: show the previous slide
    NONE = "none"


class GestureRecognizer:
    """Turns touch-start/move/end samples into a single swipe decision.

    Only the first touch point's horizontal position is tracked. Nothing
    carries over from one gesture to the next.
    """

    def __init__(self, threshold: float = SWIPE_THRESHOLD_PX) -> None:
        self.threshold = threshold
        self.touch_start_x: float | None = None
        self.touch_end_x: float | None = None

    def begin(self, x: float) -> None:
        """Start a new gesture at horizontal position ``x``."""
        self.touch_end_x = None
        self.touch_start_x = x

    def move(self, x: float) -> None:
        """Record the latest horizontal position of the active gesture."""
        self.touch_end_x = x

    def finish(self) -> SwipeDirection:
        """Complete the gesture and classify it.

        A gesture missing either endpoint (no start, or no move sample before
        the finger lifted) is not a swipe. Displacements within the threshold
        are taps.
        """
        start, end = self.touch_start_x, self.touch_end_x
        self.touch_start_x = None
        self.touch_end_x = None

        if start is None or end is None:
            return SwipeDirection.NONE

        distance = start - end
        if distance > self.threshold:
            direction = SwipeDirection.LEFT
        elif distance < -self.threshold:
            direction = SwipeDirection.RIGHT
        else:
            direction = SwipeDirection.NONE

        logger.debug("gesture_finished", distance=distance, direction=direction.value)
        return direction
