"""
Astris Scene Module

Scene objects and the store that owns them.
"""
from .models import InteractionMode, SceneObject, SceneSnapshot, ShapeType
from .store import SceneStore

__all__ = [
    'InteractionMode',
    'SceneObject',
    'SceneSnapshot',
    'ShapeType',
    'SceneStore',
]
