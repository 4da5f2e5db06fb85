"""
Scene object types shared between the store, the controller and the UI.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from webcam.gesture_classifier import GestureType

Vec3 = Tuple[float, float, float]

DEFAULT_COLOR = "#e2e8f0"


class ShapeType(Enum):
    CUBE = "CUBE"
    SPHERE = "SPHERE"
    CYLINDER = "CYLINDER"
    TORUS = "TORUS"


class InteractionMode(Enum):
    """Derived from the selection, never stored on its own."""
    CONSTRUCTION = "CONSTRUCTION"
    MANIPULATION = "MANIPULATION"


@dataclass(frozen=True)
class SceneObject:
    id: str
    shape: ShapeType
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)
    color: str = DEFAULT_COLOR
    wireframe: bool = False


@dataclass(frozen=True)
class SceneSnapshot:
    """Immutable copy of the store handed to observers on other threads."""
    objects: Tuple[SceneObject, ...]
    selected_id: Optional[str]
    last_gesture: GestureType
    history: Tuple[str, ...]
    version: int

    @property
    def mode(self) -> InteractionMode:
        if self.selected_id is None:
            return InteractionMode.CONSTRUCTION
        return InteractionMode.MANIPULATION

    @property
    def selected(self) -> Optional[SceneObject]:
        for obj in self.objects:
            if obj.id == self.selected_id:
                return obj
        return None
