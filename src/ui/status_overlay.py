"""
Status overlay window - frameless, translucent, always-on-top.
Shows interaction mode, the last gesture, hints and the event feed.
"""
from typing import Callable, Optional
from PyQt5.QtWidgets import QMainWindow, QApplication, QWidget, QVBoxLayout, QLabel
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage, QPixmap
import numpy as np

from scene.models import InteractionMode, SceneSnapshot
from webcam.gesture_classifier import GestureType


CONSTRUCTION_HINTS = [
    ("Open Palm", "Spawn Cube"),
    ("Pinch", "Spawn Sphere"),
    ("Victory", "Spawn Cylinder"),
    ("Hang Loose", "Spawn Torus"),
    ("Thumbs Up", "Confirm"),
]

MANIPULATION_HINTS = [
    ("Two Hands", "Scale Object"),
    ("Point", "Move Object"),
    ("Victory", "Rotate Axis"),
    ("Fist", "Delete"),
    ("Thumbs Up", "Unlock"),
]

STYLE = """
#CentralWidget {
    background-color: rgba(2, 6, 23, 200);
    border: 1px solid rgba(245, 158, 11, 80);
}
QLabel { color: #e2e8f0; font-family: monospace; }
#Title { font-size: 18px; font-weight: bold; letter-spacing: 3px; }
#Mode { font-size: 11px; letter-spacing: 2px; }
#Gesture { font-size: 26px; color: white; }
#Section { color: #64748b; font-size: 10px; letter-spacing: 2px; }
#Hints, #History { font-size: 12px; }
#Target { color: #f59e0b; font-size: 11px; }
"""


class StatusOverlay(QMainWindow):
    """
    Frameless overlay window docked to the left or right side of the screen.

    Press R to reset the scene, Q or Esc to quit.
    """

    def __init__(
        self,
        position: str = 'right',
        on_reset: Optional[Callable[[], None]] = None,
        parent=None
    ):
        super().__init__(parent)
        self._position = position
        self._on_reset = on_reset
        self._last_version = -1

        self._setup_window()
        self._setup_ui()
        self._position_window()

    def _setup_window(self):
        """Configure window flags and attributes."""
        self.setWindowFlags(
            Qt.FramelessWindowHint |
            Qt.WindowStaysOnTopHint |
            Qt.Tool  # Don't show in taskbar
        )
        self.setAttribute(Qt.WA_TranslucentBackground)
        # Tool windows do not take focus on their own; R and Q need it
        self.setFocusPolicy(Qt.StrongFocus)
        self.setObjectName("StatusOverlay")
        self.setStyleSheet(STYLE)

    def _setup_ui(self):
        """Build the UI."""
        central = QWidget()
        central.setObjectName("CentralWidget")
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(8)
        self.setCentralWidget(central)

        self.title_label = self._label("ASTRIS // ORBITAL", "Title")
        self.mode_label = self._label("", "Mode")
        self.target_label = self._label("", "Target")
        self.gesture_label = self._label("", "Gesture")
        self.gesture_label.setAlignment(Qt.AlignCenter)
        self.hints_label = self._label("", "Hints")
        self.history_label = self._label("", "History")

        self.webcam_preview = QLabel()
        self.webcam_preview.setFixedHeight(150)
        self.webcam_preview.setAlignment(Qt.AlignCenter)
        self.webcam_preview.setScaledContents(True)

        layout.addWidget(self.title_label)
        layout.addWidget(self.mode_label)
        layout.addWidget(self.target_label)
        layout.addWidget(self.gesture_label)
        layout.addWidget(self._label("GESTURES", "Section"))
        layout.addWidget(self.hints_label)
        layout.addWidget(self._label("EVENTS", "Section"))
        layout.addWidget(self.history_label)
        layout.addStretch(1)
        layout.addWidget(self.webcam_preview)

        self._render_mode(InteractionMode.CONSTRUCTION, None)
        self.set_gesture(GestureType.NONE)

    def _label(self, text: str, name: str) -> QLabel:
        label = QLabel(text)
        label.setObjectName(name)
        return label

    def _position_window(self):
        """Dock to the chosen side, vertically centered."""
        screen = QApplication.primaryScreen()
        if screen is None:
            return

        screen_geo = screen.geometry()
        sw = screen_geo.width()
        sh = screen_geo.height()
        sx = screen_geo.x()
        sy = screen_geo.y()

        w = int(sw * 0.22)
        h = int(sh * 0.70)
        margin = int(sw * 0.02)

        if self._position == 'left':
            x = sx + margin
        else:  # right
            x = sx + sw - w - margin
        y = sy + (sh - h) // 2

        self.setFixedSize(w, h)
        self.move(x, y)

    def set_snapshot(self, snapshot: SceneSnapshot):
        """Refresh from a store snapshot (delivered on the UI thread)."""
        if snapshot.version == self._last_version:
            return
        self._last_version = snapshot.version

        self._render_mode(snapshot.mode, snapshot.selected_id)
        self.set_gesture(snapshot.last_gesture)

        lines = []
        for i, entry in enumerate(snapshot.history):
            lines.append(f"> {entry}" if i == 0 else f"  {entry}")
        self.history_label.setText("\n".join(lines))

    def set_gesture(self, gesture: GestureType):
        self.gesture_label.setText("" if gesture == GestureType.NONE else gesture.label)

    def clear_gesture(self):
        """Hands left the frame: drop the gesture and the stale skeleton."""
        self.set_gesture(GestureType.NONE)
        self.webcam_preview.clear()

    def _render_mode(self, mode: InteractionMode, selected_id: Optional[str]):
        if mode == InteractionMode.MANIPULATION:
            self.mode_label.setText("SYSTEM: MANIPULATION")
            self.mode_label.setStyleSheet("color: #f59e0b;")
            self.target_label.setText(f"TARGET LOCK  {selected_id[:8]}" if selected_id else "")
            hints = MANIPULATION_HINTS
        else:
            self.mode_label.setText("SYSTEM: CONSTRUCTION")
            self.mode_label.setStyleSheet("color: #10b981;")
            self.target_label.setText("")
            hints = CONSTRUCTION_HINTS

        self.hints_label.setText("\n".join(f"{g:<11} {action}" for g, action in hints))

    def set_webcam_frame(self, frame: np.ndarray):
        """
        Update the skeleton preview.

        Args:
            frame: BGR numpy array with landmarks on black from HandTracker
        """
        if frame is None:
            self.webcam_preview.clear()
            return

        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        bytes_per_line = ch * w
        qimg = QImage(rgb.data, w, h, bytes_per_line, QImage.Format_RGB888)
        self.webcam_preview.setPixmap(QPixmap.fromImage(qimg))

    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key_R and self._on_reset is not None:
            self._on_reset()
        elif key in (Qt.Key_Q, Qt.Key_Escape):
            self.close()
        else:
            super().keyPressEvent(event)
