import numpy as np
import pytest
from PyQt5.QtCore import Qt
from PyQt5.QtTest import QTest

from scene.models import ShapeType
from ui.status_overlay import StatusOverlay
from webcam.gesture_classifier import GestureType


@pytest.fixture
def resets():
    return []


@pytest.fixture
def overlay(qapp, resets):
    window = StatusOverlay(on_reset=lambda: resets.append(True))
    yield window
    window.close()


def test_overlay_accepts_keyboard_focus(overlay):
    assert overlay.focusPolicy() == Qt.StrongFocus

def test_r_key_resets_scene(overlay, resets):
    QTest.keyClick(overlay, Qt.Key_R)
    assert resets == [True]

def test_other_keys_do_not_reset(overlay, resets):
    QTest.keyClick(overlay, Qt.Key_X)
    assert resets == []

def test_starts_in_construction_mode(overlay):
    assert overlay.mode_label.text() == "SYSTEM: CONSTRUCTION"
    assert overlay.gesture_label.text() == ""
    assert "Spawn Cube" in overlay.hints_label.text()

def test_snapshot_with_selection_shows_manipulation(overlay, store):
    store.add_object(ShapeType.CUBE)
    overlay.set_snapshot(store.snapshot())
    assert overlay.mode_label.text() == "SYSTEM: MANIPULATION"
    assert "obj-1" in overlay.target_label.text()
    assert overlay.history_label.text().startswith("> Created")
    assert "Delete" in overlay.hints_label.text()

def test_clear_gesture_empties_label_and_preview(overlay):
    overlay.set_gesture(GestureType.PINCH)
    overlay.set_webcam_frame(np.zeros((48, 64, 3), dtype=np.uint8))
    assert overlay.gesture_label.text() != ""
    assert overlay.webcam_preview.pixmap() is not None

    overlay.clear_gesture()
    assert overlay.gesture_label.text() == ""
    assert overlay.webcam_preview.pixmap() is None or overlay.webcam_preview.pixmap().isNull()
