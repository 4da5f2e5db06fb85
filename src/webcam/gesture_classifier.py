"""
Gesture classification from hand landmarks.
Maps a single hand pose to a gesture and a pair of hands to a scale distance.
"""
import logging
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

from .config import GestureConfig
from .geometry import distance, distance_2d
from .landmarks import (
    Landmark, NUM_LANDMARKS, WRIST, THUMB_TIP, INDEX_MCP,
    INDEX_PIP, INDEX_TIP, MIDDLE_PIP, MIDDLE_TIP,
    RING_PIP, RING_TIP, PINKY_PIP, PINKY_TIP,
)

logger = logging.getLogger(__name__)


class GestureType(Enum):
    """Detected gesture types."""
    NONE = auto()
    OPEN_PALM = auto()      # Spawn cube
    PINCH = auto()          # Spawn sphere
    VICTORY = auto()        # Spawn cylinder / rotate
    HANG_LOOSE = auto()     # Spawn torus
    FIST = auto()           # Delete
    POINT = auto()          # Move
    THUMBS_UP = auto()      # Confirm / deselect
    THUMBS_DOWN = auto()
    TWO_HAND_SCALE = auto() # Resize with two hands

    @property
    def label(self) -> str:
        return self.name.replace("_", " ")


HandPoints = Sequence[Landmark]


def usable_hands(hands: Optional[Sequence[HandPoints]]) -> List[HandPoints]:
    """Drop hands that do not carry a full landmark set, keeping detector order."""
    if not hands:
        return []
    return [h for h in hands if h is not None and len(h) >= NUM_LANDMARKS]


class GestureClassifier:
    """
    Classifies hand landmarks with fixed geometric thresholds.

    Precedence is first-match:
    - Pinch: thumb tip touching index tip, whatever the other fingers do
    - Curled hand: thumbs up / thumbs down / fist depending on the thumb
    - Point, victory, hang loose, open palm by extended finger pattern
    """

    def __init__(self, config: Optional[GestureConfig] = None):
        self._config = config or GestureConfig()

    def classify(self, landmarks: Optional[HandPoints]) -> GestureType:
        """
        Classify one hand.

        Args:
            landmarks: 21 (x, y, z) points in MediaPipe order

        Returns:
            The matching gesture, or NONE for incomplete input.
        """
        if landmarks is None or len(landmarks) < NUM_LANDMARKS:
            return GestureType.NONE

        cfg = self._config
        wrist = landmarks[WRIST]
        thumb_tip = landmarks[THUMB_TIP]

        thumb_index_dist = distance(thumb_tip, landmarks[INDEX_TIP])
        index_middle_dist = distance(landmarks[INDEX_TIP], landmarks[MIDDLE_TIP])

        # Thumb counts as extended when its tip is away from the index base
        thumb = distance(thumb_tip, landmarks[INDEX_MCP]) > cfg.thumb_extension_threshold

        index = self._is_finger_extended(landmarks, INDEX_TIP, INDEX_PIP)
        middle = self._is_finger_extended(landmarks, MIDDLE_TIP, MIDDLE_PIP)
        ring = self._is_finger_extended(landmarks, RING_TIP, RING_PIP)
        pinky = self._is_finger_extended(landmarks, PINKY_TIP, PINKY_PIP)
        extended_count = sum((index, middle, ring, pinky))

        logger.debug(
            "thumb_index=%.3f index_middle=%.3f thumb=%s fingers=%s",
            thumb_index_dist, index_middle_dist, thumb,
            (index, middle, ring, pinky),
        )

        # Pinch first: other fingers may be in any state
        if thumb_index_dist < cfg.pinch_threshold:
            return GestureType.PINCH

        if extended_count == 0:
            # Smaller y is higher in the image
            if thumb:
                if thumb_tip[1] < wrist[1] - cfg.thumb_vertical_margin:
                    return GestureType.THUMBS_UP
                if thumb_tip[1] > wrist[1] + cfg.thumb_vertical_margin:
                    return GestureType.THUMBS_DOWN
            return GestureType.FIST

        if index and not middle and not ring and not pinky:
            return GestureType.POINT

        if index and middle and not ring and not pinky:
            if index_middle_dist > cfg.victory_spread_threshold:
                return GestureType.VICTORY

        if thumb and pinky and not index and not middle and not ring:
            return GestureType.HANG_LOOSE

        # Ring and pinky are often slightly curved on an open palm
        if index and middle and (ring or pinky):
            return GestureType.OPEN_PALM

        return GestureType.NONE

    def classify_hands(
        self, hands: Optional[Sequence[HandPoints]]
    ) -> Tuple[GestureType, float]:
        """
        Classify a whole frame.

        Exactly two hands produce TWO_HAND_SCALE together with the image-plane
        distance between the two index tips. Any other count classifies the first
        hand on its own.

        Returns:
            (raw gesture, scale distance)
        """
        hands = usable_hands(hands)

        if len(hands) == 2:
            scale_distance = distance_2d(hands[0][INDEX_TIP], hands[1][INDEX_TIP])
            return GestureType.TWO_HAND_SCALE, scale_distance

        if hands:
            return self.classify(hands[0]), 0.0

        return GestureType.NONE, 0.0

    @staticmethod
    def _is_finger_extended(landmarks: HandPoints, tip: int, pip: int) -> bool:
        """Finger is extended when its tip is farther from the wrist than its PIP joint."""
        wrist = landmarks[WRIST]
        return distance(wrist, landmarks[tip]) > distance(wrist, landmarks[pip])
