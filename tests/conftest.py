import os

import pytest

from scene.store import SceneStore
from webcam.config import Config

# Synthetic hand: wrist at the bottom, fingers pointing up the image.
WRIST = (0.5, 0.8)
FINGER_X = {"index": 0.45, "middle": 0.50, "ring": 0.55, "pinky": 0.60}
MCP_Y, PIP_Y = 0.6, 0.5
EXTENDED_DIP_Y, EXTENDED_TIP_Y = 0.4, 0.3
CURLED_DIP_Y, CURLED_TIP_Y = 0.6, 0.68

THUMB_TIPS = {
    "curled": (0.47, 0.62),  # Tucked against the index base
    "out": (0.30, 0.78),     # Sideways, level with the wrist
    "up": (0.35, 0.60),
    "down": (0.35, 0.90),
}


def build_hand(index=False, middle=False, ring=False, pinky=False,
               thumb="curled", pinch=False, offset=(0.0, 0.0, 0.0)):
    """Return 21 (x, y, z) landmarks in MediaPipe order."""
    points = [None] * 21
    points[0] = (WRIST[0], WRIST[1], 0.0)

    tx, ty = THUMB_TIPS[thumb]
    if pinch:
        # Thumb tip right next to the index tip
        tx = FINGER_X["index"] + 0.01
        ty = (EXTENDED_TIP_Y if index else CURLED_TIP_Y) + 0.01
    for i, t in zip((1, 2, 3, 4), (0.25, 0.5, 0.75, 1.0)):
        points[i] = (WRIST[0] + (tx - WRIST[0]) * t, WRIST[1] + (ty - WRIST[1]) * t, 0.0)

    for base, (name, extended) in zip(
        (5, 9, 13, 17),
        (("index", index), ("middle", middle), ("ring", ring), ("pinky", pinky)),
    ):
        x = FINGER_X[name]
        points[base] = (x, MCP_Y, 0.0)
        points[base + 1] = (x, PIP_Y, 0.0)
        points[base + 2] = (x, EXTENDED_DIP_Y if extended else CURLED_DIP_Y, 0.0)
        points[base + 3] = (x, EXTENDED_TIP_Y if extended else CURLED_TIP_Y, 0.0)

    dx, dy, dz = offset
    return [(x + dx, y + dy, z + dz) for x, y, z in points]


POSES = {
    "fist": {},
    "point": {"index": True},
    "victory": {"index": True, "middle": True},
    "open_palm": {"index": True, "middle": True, "ring": True, "pinky": True, "thumb": "out"},
    "hang_loose": {"pinky": True, "thumb": "out"},
    "thumbs_up": {"thumb": "up"},
    "thumbs_down": {"thumb": "down"},
    "pinch": {"index": True, "pinch": True},
}


def pose(name, **overrides):
    kwargs = dict(POSES[name])
    kwargs.update(overrides)
    return build_hand(**kwargs)


@pytest.fixture
def make_hand():
    return build_hand


@pytest.fixture
def make_pose():
    return pose


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def store():
    counter = iter(range(1, 1000))
    return SceneStore(id_factory=lambda: f"obj-{next(counter)}")


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the whole session, rendered offscreen."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PyQt5.QtWidgets import QApplication
    return QApplication.instance() or QApplication([])
