"""
Maps the effective gesture of a frame to a scene mutation.

Construction mode (nothing selected):
    OPEN_PALM -> cube, PINCH -> sphere, VICTORY -> cylinder, HANG_LOOSE -> torus

Manipulation mode (an object selected):
    POINT -> move, TWO_HAND_SCALE -> scale, VICTORY -> rotate   (every frame)
    THUMBS_UP -> deselect, FIST -> delete                        (cooldown-gated)
"""
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Sequence

from scene.models import InteractionMode, ShapeType
from scene.store import SceneStore
from webcam.config import InteractionConfig
from webcam.gesture_classifier import GestureType
from webcam.landmarks import Landmark, WRIST, INDEX_TIP

logger = logging.getLogger(__name__)


class InteractionAction(Enum):
    """What a call to `InteractionController.handle` did to the scene."""
    MOVE = auto()
    SCALE = auto()
    ROTATE = auto()
    DESELECT = auto()
    DELETE = auto()
    SPAWN = auto()
    CONFIRM = auto()   # Thumbs up with nothing selected


SPAWN_SHAPES = {
    GestureType.OPEN_PALM: ShapeType.CUBE,
    GestureType.PINCH: ShapeType.SPHERE,
    GestureType.VICTORY: ShapeType.CYLINDER,
    GestureType.HANG_LOOSE: ShapeType.TORUS,
}


@dataclass
class CooldownState:
    """Timestamp (ms) of the last discrete action."""
    last_action_ms: float = field(default=float("-inf"))

    def ready(self, now_ms: float, cooldown_ms: float) -> bool:
        return now_ms - self.last_action_ms >= cooldown_ms

    def stamp(self, now_ms: float) -> None:
        self.last_action_ms = now_ms


class InteractionController:
    """
    Decides which store mutation, if any, a frame produces.

    The controller keeps no object references between calls: the selection
    and objects are read from the store on every call, and at most one
    mutation is issued per call.
    """

    def __init__(
        self,
        store: SceneStore,
        config: Optional[InteractionConfig] = None,
        cooldown: Optional[CooldownState] = None,
    ):
        self._store = store
        self._config = config or InteractionConfig()
        self.cooldown = cooldown if cooldown is not None else CooldownState()

    @property
    def mode(self) -> InteractionMode:
        if self._store.selected_id is None:
            return InteractionMode.CONSTRUCTION
        return InteractionMode.MANIPULATION

    def handle(
        self,
        gesture: GestureType,
        primary: Optional[Sequence[Landmark]],
        scale_distance: float,
        now_ms: float,
    ) -> Optional[InteractionAction]:
        """
        Apply the effective gesture of one frame.

        Args:
            gesture: Effective gesture from the stabilizer
            primary: Landmarks of the first detected hand
            scale_distance: Index-tip separation when two hands are present
            now_ms: Frame timestamp in milliseconds

        Returns:
            The action taken, or None if the frame changed nothing.
        """
        cfg = self._config
        selected_id = self._store.selected_id

        if selected_id is not None:
            obj = self._store.get_object(selected_id)
            if obj is None:
                # Selected object deleted elsewhere this frame
                return None

            if gesture == GestureType.POINT and _has(primary, INDEX_TIP):
                tip = primary[INDEX_TIP]
                x = (0.5 - tip[0]) * cfg.move_range_x
                y = (0.5 - tip[1]) * cfg.move_range_y
                self._store.update_object(selected_id, position=(x, y, obj.position[2]))
                return InteractionAction.MOVE

            if gesture == GestureType.TWO_HAND_SCALE and scale_distance > 0:
                s = max(cfg.scale_min, min(scale_distance * cfg.scale_gain, cfg.scale_max))
                self._store.update_object(selected_id, scale=(s, s, s))
                return InteractionAction.SCALE

            if gesture == GestureType.VICTORY and _has(primary, WRIST):
                rotation_y = (primary[WRIST][0] - 0.5) * cfg.rotate_gain
                self._store.update_object(
                    selected_id, rotation=(obj.rotation[0], rotation_y, obj.rotation[2])
                )
                return InteractionAction.ROTATE

        # Discrete actions share one cooldown
        if not self.cooldown.ready(now_ms, cfg.cooldown_ms):
            return None

        if gesture == GestureType.THUMBS_UP:
            self.cooldown.stamp(now_ms)
            if selected_id is not None:
                self._store.select_object(None)
                logger.info("Deselected %s", selected_id)
                return InteractionAction.DESELECT
            return InteractionAction.CONFIRM

        if gesture == GestureType.FIST and selected_id is not None:
            self._store.remove_object(selected_id)
            self.cooldown.stamp(now_ms)
            return InteractionAction.DELETE

        if selected_id is None and gesture in SPAWN_SHAPES:
            self._store.add_object(SPAWN_SHAPES[gesture])
            self.cooldown.stamp(now_ms)
            return InteractionAction.SPAWN

        return None


def _has(landmarks: Optional[Sequence[Landmark]], index: int) -> bool:
    return landmarks is not None and len(landmarks) > index
