"""
One frame of the gesture pipeline:
landmarks -> classifier -> stabilizer -> interaction controller -> store.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from scene.store import SceneStore
from webcam.config import Config
from webcam.gesture_classifier import GestureClassifier, GestureType, HandPoints, usable_hands
from webcam.stabilizer import GestureStabilizer, StabilizerState
from .controller import CooldownState, InteractionAction, InteractionController

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    """Outcome of one processed frame."""
    raw: GestureType = GestureType.NONE
    confirmed: GestureType = GestureType.NONE
    effective: GestureType = GestureType.NONE
    scale_distance: float = 0.0
    hand_count: int = 0
    action: Optional[InteractionAction] = None


class GesturePipeline:
    """
    Runs the classifier, stabilizer and controller for one frame at a time.

    Frames must be processed one after another from a single thread; the
    stabilizer and cooldown state are not shared.
    """

    def __init__(self, config: Config, store: SceneStore):
        self._store = store
        self.classifier = GestureClassifier(config.gestures)
        self.stabilizer = GestureStabilizer(
            persistence_threshold=config.gestures.persistence_frames,
            state=StabilizerState(),
            on_change=store.set_last_gesture,
        )
        self.controller = InteractionController(
            store, config.interaction, cooldown=CooldownState()
        )

    @property
    def store(self) -> SceneStore:
        return self._store

    def reset(self) -> None:
        """Start a new detection session."""
        self.stabilizer.reset()
        self.controller.cooldown = CooldownState()
        self._store.set_last_gesture(GestureType.NONE)

    def process(self, hands: Optional[Sequence[HandPoints]], now_ms: float) -> FrameResult:
        """
        Process one frame.

        Args:
            hands: Landmark lists in detector order (0, 1 or 2 hands)
            now_ms: Frame timestamp in milliseconds
        """
        hands = usable_hands(hands)

        if not hands:
            confirmed = self.stabilizer.release()
            return FrameResult(confirmed=confirmed, effective=confirmed)

        raw, scale_distance = self.classifier.classify_hands(hands)
        confirmed, effective = self.stabilizer.update(raw, scale_distance)

        # The first reported hand drives move/rotate, even while scaling
        action = self.controller.handle(effective, hands[0], scale_distance, now_ms)
        if action is not None:
            logger.debug("%s -> %s", effective.name, action.name)

        return FrameResult(
            raw=raw,
            confirmed=confirmed,
            effective=effective,
            scale_distance=scale_distance,
            hand_count=len(hands),
            action=action,
        )
