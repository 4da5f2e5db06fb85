"""
Background worker for the gesture frame loop.
Runs in a separate QThread to avoid blocking the UI.
"""
import logging
import time
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

from interaction.pipeline import GesturePipeline
from scene.store import SceneStore
from ui.palette import skeleton_color
from .config import Config
from .hand_tracker import HandTracker

logger = logging.getLogger(__name__)


class WebcamWorker(QObject):
    """
    Worker class that runs detection, classification and interaction.

    Each tick runs to completion before the next one starts; the scene store
    is only mutated from this loop. Observers get immutable snapshots.
    """
    # Signals
    scene_changed = pyqtSignal(object)    # Emits SceneSnapshot
    hand_lost = pyqtSignal()
    frame_ready = pyqtSignal(object)      # Emits numpy array (BGR skeleton on black)
    error = pyqtSignal(str)

    def __init__(self, config: Config, store: SceneStore, parent=None):
        super().__init__(parent)
        self._config = config
        self._store = store
        self._tracker: Optional[HandTracker] = None
        self._is_running = False

    def start_process(self):
        """Main processing loop. Runs in worker thread until stop_process()."""
        self._tracker = HandTracker(self._config)
        pipeline = GesturePipeline(self._config, self._store)

        target_fps = max(1, self._config.ui.target_fps)
        min_interval = 1.0 / target_fps
        frame_interval = 1.0 / 15  # Preview refresh
        last_frame_time = 0.0
        last_version = -1
        had_hands = False

        try:
            if not self._tracker.start():
                self.error.emit("Could not start hand tracker (camera or model missing)")
                return

            pipeline.reset()
            self._is_running = True

            while self._is_running:
                loop_start = time.perf_counter()

                # 1. Detect
                hands = self._tracker.get_hands()

                # 2. Classify, stabilize, interact
                now_ms = time.monotonic() * 1000.0
                result = pipeline.process([h.landmarks for h in hands], now_ms)

                if had_hands and result.hand_count == 0:
                    self.hand_lost.emit()
                had_hands = result.hand_count > 0

                # 3. Publish scene only when something changed
                snapshot = self._store.snapshot()
                if snapshot.version != last_version:
                    last_version = snapshot.version
                    self.scene_changed.emit(snapshot)

                # 4. Skeleton preview at a low rate
                now = time.perf_counter()
                if self._config.ui.show_preview and now - last_frame_time >= frame_interval:
                    frame = self._tracker.get_frame_with_landmarks(
                        hands, color=skeleton_color(result.effective), black_background=True
                    )
                    if frame is not None:
                        self.frame_ready.emit(frame)
                    last_frame_time = now

                # 5. Pace to the target rate
                elapsed = time.perf_counter() - loop_start
                sleep_time = min_interval - elapsed
                if sleep_time > 0:
                    time.sleep(sleep_time)

        except Exception as e:
            logger.exception("Worker loop failed")
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            self._tracker.stop()

    def stop_process(self):
        """Signal the loop to stop; the current tick finishes and no new one starts."""
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running
