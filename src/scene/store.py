"""
In-process scene object store.

The store owns the object list, the selection and the recent event feed.
Every mutation goes through one of its methods and holds the store lock for
the duration of the call, so the frame loop and the UI thread never observe
a half-applied change.
"""
import logging
import threading
import uuid
from collections import deque
from dataclasses import replace
from typing import Callable, List, Optional

from webcam.gesture_classifier import GestureType
from .models import SceneObject, SceneSnapshot, ShapeType, Vec3

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class SceneStore:
    """
    Holds scene objects and the current selection.

    Objects are immutable; an update swaps the stored instance for a modified
    copy. Readers get copies, never the live list.
    """

    HISTORY_SIZE = 5

    def __init__(self, id_factory: Callable[[], str] = _new_id):
        self._id_factory = id_factory
        self._lock = threading.RLock()
        self._objects: List[SceneObject] = []
        self._selected_id: Optional[str] = None
        self._last_gesture = GestureType.NONE
        self._history: deque = deque(maxlen=self.HISTORY_SIZE)
        self._version = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def objects(self) -> List[SceneObject]:
        with self._lock:
            return list(self._objects)

    @property
    def selected_id(self) -> Optional[str]:
        with self._lock:
            return self._selected_id

    @property
    def last_gesture(self) -> GestureType:
        with self._lock:
            return self._last_gesture

    @property
    def history(self) -> List[str]:
        """Recent events, newest first."""
        with self._lock:
            return list(self._history)

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def get_object(self, object_id: Optional[str]) -> Optional[SceneObject]:
        with self._lock:
            for obj in self._objects:
                if obj.id == object_id:
                    return obj
            return None

    def snapshot(self) -> SceneSnapshot:
        with self._lock:
            return SceneSnapshot(
                objects=tuple(self._objects),
                selected_id=self._selected_id,
                last_gesture=self._last_gesture,
                history=tuple(self._history),
                version=self._version,
            )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_object(self, shape: ShapeType, position: Vec3 = (0.0, 0.0, 0.0)) -> str:
        """Create an object and select it for immediate manipulation."""
        with self._lock:
            obj = SceneObject(id=self._id_factory(), shape=shape, position=tuple(position))
            self._objects.append(obj)
            self._selected_id = obj.id
            self._log(f"Created {shape.value}")
            logger.info("Created %s %s", shape.value, obj.id)
            return obj.id

    def remove_object(self, object_id: str) -> None:
        with self._lock:
            self._objects = [obj for obj in self._objects if obj.id != object_id]
            if self._selected_id == object_id:
                self._selected_id = None
            self._log("Deleted Object")
            logger.info("Deleted %s", object_id)

    def update_object(
        self,
        object_id: str,
        position: Optional[Vec3] = None,
        rotation: Optional[Vec3] = None,
        scale: Optional[Vec3] = None,
    ) -> None:
        """Apply a partial update. Unknown ids are ignored."""
        changes = {}
        if position is not None:
            changes["position"] = tuple(position)
        if rotation is not None:
            changes["rotation"] = tuple(rotation)
        if scale is not None:
            changes["scale"] = tuple(scale)

        with self._lock:
            for i, obj in enumerate(self._objects):
                if obj.id == object_id:
                    self._objects[i] = replace(obj, **changes)
                    self._version += 1
                    return

    def select_object(self, object_id: Optional[str]) -> None:
        with self._lock:
            self._selected_id = object_id
            self._version += 1

    def set_last_gesture(self, gesture: GestureType) -> None:
        """Record the latest confirmed gesture; repeats are ignored."""
        with self._lock:
            if gesture == self._last_gesture:
                return
            self._last_gesture = gesture
            if gesture != GestureType.NONE:
                self._log(f"Detected: {gesture.name}")
            else:
                self._version += 1

    def reset_scene(self) -> None:
        with self._lock:
            self._objects = []
            self._selected_id = None
            self._history.clear()
            self._log("Scene Reset")
            logger.info("Scene reset")

    def _log(self, message: str) -> None:
        self._history.appendleft(message)
        self._version += 1
