"""
Skeleton colors per gesture (BGR, for OpenCV drawing).
"""
from typing import Dict, Tuple

from webcam.gesture_classifier import GestureType

BGR = Tuple[int, int, int]

DEFAULT_COLOR: BGR = (36, 191, 251)   # Amber

GESTURE_COLORS: Dict[GestureType, BGR] = {
    GestureType.PINCH: (255, 255, 255),
    GestureType.OPEN_PALM: (11, 158, 245),
    GestureType.VICTORY: (6, 119, 217),
    GestureType.FIST: (68, 68, 239),
    GestureType.THUMBS_UP: (153, 211, 52),
    GestureType.TWO_HAND_SCALE: (77, 211, 252),
}


def skeleton_color(gesture: GestureType) -> BGR:
    return GESTURE_COLORS.get(gesture, DEFAULT_COLOR)
