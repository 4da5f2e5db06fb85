"""
MediaPipe Hand Tracker wrapper using the Tasks API.
Handles camera capture and multi-hand landmark detection.
"""
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import time
import cv2
import numpy as np
import mediapipe as mp

from .config import Config, CameraConfig, MediaPipeConfig
from .landmarks import HandLandmarks, HAND_CONNECTIONS

logger = logging.getLogger(__name__)

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode

MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)

BGR = Tuple[int, int, int]


class HandTracker:
    """
    MediaPipe hand tracking wrapper with camera management.
    Uses the MediaPipe Tasks API (0.10+) in VIDEO mode.

    Hands are returned in detector order; the first one is the primary hand.
    """

    # Default model path relative to project root
    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        """
        Initialize hand tracker.

        Args:
            config: Astris configuration
            model_path: Path to hand_landmarker.task model file
        """
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        self._model_path = model_path or self.DEFAULT_MODEL_PATH

        # Lazy initialization
        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        # State
        self._is_running = False
        self._last_frame: Optional[np.ndarray] = None
        self._frame_count = 0
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1

    def start(self) -> bool:
        """
        Start camera capture and MediaPipe.

        Returns:
            True if started successfully, False otherwise.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            logger.error("Model file not found: %s (download from %s)", self._model_path, MODEL_URL)
            return False

        self._cap = cv2.VideoCapture(self._camera_config.device_id)
        if not self._cap.isOpened():
            logger.error("Could not open camera %d", self._camera_config.device_id)
            self._cap.release()
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._camera_config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._camera_config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self._camera_config.fps)

        base_opts = BaseOptions(model_asset_path=str(self._model_path))
        if self._mp_config.use_gpu:
            try:
                base_opts = BaseOptions(
                    model_asset_path=str(self._model_path),
                    delegate=BaseOptions.Delegate.GPU,
                )
                logger.info("GPU delegate enabled for MediaPipe")
            except AttributeError:
                logger.warning("GPU delegate not available, using CPU")

        options = HandLandmarkerOptions(
            base_options=base_opts,
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._mp_config.max_num_hands,
            min_hand_detection_confidence=self._mp_config.min_detection_confidence,
            min_tracking_confidence=self._mp_config.min_tracking_confidence,
        )

        try:
            self._landmarker = HandLandmarker.create_from_options(options)
        except (RuntimeError, ValueError, OSError) as e:
            logger.error("Could not create hand landmarker from %s: %s", self._model_path, e)
            self._cap.release()
            self._cap = None
            return False

        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        logger.info("Hand tracker started on camera %d", self._camera_config.device_id)
        return True

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None

        self._last_frame = None
        logger.info("Hand tracker stopped")

    def get_hands(self) -> List[HandLandmarks]:
        """
        Capture a frame and detect up to `max_num_hands` hands.

        Returns:
            Detected hands in detector order; empty when nothing is visible
            or the camera read failed.
        """
        if not self._is_running or self._cap is None or self._landmarker is None:
            return []

        ret, frame = self._cap.read()
        if not ret:
            logger.debug("Camera read failed")
            return []

        self._frame_count += 1

        # Mirror horizontally
        frame = cv2.flip(frame, 1)
        self._last_frame = frame

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # detect_for_video needs strictly increasing timestamps
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)

        if not result.hand_landmarks:
            return []

        hands = []
        for i, hand_landmarks in enumerate(result.hand_landmarks):
            category = result.handedness[i][0] if i < len(result.handedness) else None
            hands.append(HandLandmarks(
                landmarks=[(lm.x, lm.y, lm.z) for lm in hand_landmarks],
                handedness=category.category_name if category else "Unknown",
                confidence=category.score if category else 0.0,
            ))
        return hands

    def get_frame_with_landmarks(
        self,
        hands: Sequence[HandLandmarks] = (),
        color: BGR = (36, 191, 251),
        black_background: bool = False
    ) -> Optional[np.ndarray]:
        """
        Get last frame with a skeleton overlay for every detected hand.

        Args:
            hands: Hands to draw.
            color: BGR color for the bones.
            black_background: If True, draw on black instead of camera image.

        Returns:
            Frame with landmarks drawn, or None if no frame available.
        """
        if self._last_frame is None:
            return None

        if black_background:
            frame = np.zeros_like(self._last_frame)
        else:
            frame = self._last_frame.copy()

        h, w = frame.shape[:2]
        for hand in hands:
            points = [(int(x * w), int(y * h)) for x, y, _ in hand.landmarks]

            for start_idx, end_idx in HAND_CONNECTIONS:
                if end_idx < len(points):
                    cv2.line(frame, points[start_idx], points[end_idx], color, 2)

            for point in points:
                cv2.circle(frame, point, 3, (255, 255, 255), -1)

        return frame

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def frame_count(self) -> int:
        return self._frame_count
