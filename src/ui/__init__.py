"""
Astris UI Module

PyQt5 status overlay and skeleton colors.
"""
from .palette import GESTURE_COLORS, skeleton_color
from .status_overlay import StatusOverlay

__all__ = [
    'GESTURE_COLORS',
    'skeleton_color',
    'StatusOverlay',
]
