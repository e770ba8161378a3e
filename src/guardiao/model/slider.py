"""
Before/After Comparison Slider
==============================
A normalized split position in [0, 1], driven by pointer drags across the
image container. Position 0 shows only the "after" image, position 1 shows
only the "before" image.

A drag is modelled as an explicit `DragSession`: it is opened on pointer-down
inside the container, receives every move, and is closed on pointer-up
anywhere (or when the owning view is torn down). The session is a context
manager so the release is guaranteed.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from guardiao.config import SLIDER_INITIAL_POSITION

logger = logging.getLogger(__name__)


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))


class DragSession:
    """One pointer-down .. pointer-up interval bound to a container geometry."""

    def __init__(self, slider: ComparisonSlider, container_left: float, container_width: float) -> None:
        self._slider = slider
        self.container_left = container_left
        self.container_width = container_width
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def update(self, pointer_x: float) -> float:
        """Recompute the position for a move event. Ignored once the session ended."""
        if not self._active:
            return self._slider.position
        return self._slider.on_drag_move(pointer_x, self.container_left, self.container_width)

    def end(self) -> None:
        if not self._active:
            return
        self._active = False
        self._slider._release(self)

    def __enter__(self) -> DragSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end()


class ComparisonSlider:
    """Holds the split position and the (at most one) active drag session."""

    def __init__(self, position: float = SLIDER_INITIAL_POSITION) -> None:
        self._position = clamp(position)
        self._session: Optional[DragSession] = None
        self._listeners: list[Callable[[float], None]] = []

    @property
    def position(self) -> float:
        return self._position

    @property
    def clip_inset_percent(self) -> float:
        """Right inset of the "before" overlay, in percent of the container width."""
        return (1.0 - self._position) * 100.0

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    @property
    def is_dragging(self) -> bool:
        return self._session is not None

    def add_listener(self, callback: Callable[[float], None]) -> None:
        self._listeners.append(callback)

    def on_drag_move(self, pointer_x: float, container_left: float, container_width: float) -> float:
        """
        Map a pointer x coordinate to the clamped split position and store it.

        Args:
            pointer_x: Pointer x in the same coordinate space as container_left.
            container_left: Left edge of the image container.
            container_width: Width of the container; must be > 0.

        Returns:
            The new position in [0, 1].
        """
        if container_width <= 0:
            logger.warning(f"Ignoring slider move for non-positive container width {container_width}.")
            return self._position

        self._set_position(clamp((pointer_x - container_left) / container_width))
        return self._position

    def begin_drag(self, pointer_x: float, container_left: float, container_width: float) -> DragSession:
        """
        Start tracking on pointer-down. The press itself already moves the split.

        A press while a session is still open restarts tracking.
        """
        if self._session is not None:
            self._session.end()
        session = DragSession(self, container_left, container_width)
        self._session = session
        session.update(pointer_x)
        return session

    def end_drag(self) -> None:
        """Pointer-up anywhere, or teardown of the owning view."""
        if self._session is not None:
            self._session.end()

    def reset(self) -> None:
        self.end_drag()
        self._set_position(clamp(SLIDER_INITIAL_POSITION))

    def _set_position(self, position: float) -> None:
        if position != self._position:
            self._position = position
            for callback in self._listeners:
                callback(position)

    def _release(self, session: DragSession) -> None:
        if self._session is session:
            self._session = None
