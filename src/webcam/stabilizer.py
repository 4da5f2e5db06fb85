"""
Temporal debouncing of raw per-frame gestures.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .gesture_classifier import GestureType

logger = logging.getLogger(__name__)


@dataclass
class StabilizerState:
    """Debounce counters for one detection session."""
    pending_gesture: GestureType = GestureType.NONE
    pending_frame_count: int = 0
    confirmed_gesture: GestureType = GestureType.NONE


class GestureStabilizer:
    """
    Turns raw per-frame gestures into a confirmed gesture.

    A single-hand gesture is confirmed once the same raw value has been seen
    for more than `persistence_threshold` consecutive frames (the sixth frame
    with the default of 5). TWO_HAND_SCALE
    skips the count so scaling tracks hand separation every frame. Losing
    all hands releases the confirmed gesture immediately.
    """

    def __init__(
        self,
        persistence_threshold: int = 5,
        state: Optional[StabilizerState] = None,
        on_change: Optional[Callable[[GestureType], None]] = None,
    ):
        """
        Args:
            persistence_threshold: Frames a gesture must persist beyond before it is confirmed
            state: Externally owned state, a fresh one is created if omitted
            on_change: Called with the newly confirmed gesture
        """
        self._threshold = persistence_threshold
        self.state = state if state is not None else StabilizerState()
        self._on_change = on_change

    @property
    def confirmed(self) -> GestureType:
        return self.state.confirmed_gesture

    def update(
        self, raw: GestureType, scale_distance: float = 0.0
    ) -> Tuple[GestureType, GestureType]:
        """
        Feed one frame with at least one hand present.

        Returns:
            (confirmed gesture, effective gesture for this frame)
        """
        state = self.state

        if raw == GestureType.TWO_HAND_SCALE:
            state.confirmed_gesture = raw
            logger.debug("Two-hand scale, distance %.3f", scale_distance)
            self._notify(raw)
            return state.confirmed_gesture, raw

        # The count includes the frame that started the run
        if raw == state.pending_gesture:
            state.pending_frame_count += 1
        else:
            state.pending_gesture = raw
            state.pending_frame_count = 1

        if state.pending_frame_count > self._threshold and state.confirmed_gesture != raw:
            logger.info("Gesture confirmed: %s", raw.name)
            state.confirmed_gesture = raw
            self._notify(raw)

        return state.confirmed_gesture, state.confirmed_gesture

    def release(self) -> GestureType:
        """Handle a frame with no hands: drop the confirmed gesture without debounce."""
        if self.state.confirmed_gesture != GestureType.NONE:
            logger.info("Hands lost, releasing %s", self.state.confirmed_gesture.name)
            self.state.confirmed_gesture = GestureType.NONE
            self._notify(GestureType.NONE)
        return self.state.confirmed_gesture

    def reset(self) -> None:
        """Start a new detection session."""
        self.state.pending_gesture = GestureType.NONE
        self.state.pending_frame_count = 0
        self.state.confirmed_gesture = GestureType.NONE

    def _notify(self, gesture: GestureType) -> None:
        if self._on_change is not None:
            self._on_change(gesture)
