from types import SimpleNamespace

import pytest

import webcam.worker as worker_module
from scene.models import ShapeType
from ui.palette import DEFAULT_COLOR
from webcam.landmarks import HandLandmarks
from webcam.worker import WebcamWorker

MAX_TICKS = 500


class StubTracker:
    """Stands in for HandTracker: scripted hands, no camera."""

    def __init__(self):
        self.start_result = True
        self.start_error = None
        self.frames = []
        self.fail_on_tick = None
        self.on_tick = None
        self.ticks = 0
        self.stopped = False
        self.preview_colors = []

    def start(self):
        if self.start_error is not None:
            raise self.start_error
        return self.start_result

    def stop(self):
        self.stopped = True

    def get_hands(self):
        self.ticks += 1
        if self.ticks > MAX_TICKS:
            raise RuntimeError("loop did not stop")
        if self.ticks == self.fail_on_tick:
            raise RuntimeError("camera unplugged")
        if self.on_tick is not None:
            self.on_tick(self.ticks)
        if self.ticks <= len(self.frames):
            return self.frames[self.ticks - 1]
        return []

    def get_frame_with_landmarks(self, hands=(), color=(0, 0, 0), black_background=False):
        self.preview_colors.append(color)
        return "frame"


@pytest.fixture
def tracker(monkeypatch):
    stub = StubTracker()
    monkeypatch.setattr(worker_module, "HandTracker", lambda config: stub)
    return stub


@pytest.fixture
def worker(qapp, config, store):
    config.ui.show_preview = False
    config.ui.target_fps = 1000
    return WebcamWorker(config, store)


@pytest.fixture
def emitted(worker):
    seen = SimpleNamespace(errors=[], snapshots=[], lost=[], frames=[])
    worker.error.connect(seen.errors.append)
    worker.scene_changed.connect(seen.snapshots.append)
    worker.hand_lost.connect(lambda: seen.lost.append(True))
    worker.frame_ready.connect(seen.frames.append)
    return seen


def stop_at(worker, tick):
    def on_tick(n):
        if n == tick:
            worker.stop_process()
    return on_tick


def test_stop_process_finishes_current_tick_and_exits(worker, tracker, emitted):
    tracker.on_tick = stop_at(worker, 3)
    worker.start_process()
    assert tracker.ticks == 3
    assert tracker.stopped
    assert not worker.is_running
    assert emitted.errors == []

def test_loop_error_is_reported_and_tracker_released(worker, tracker, emitted):
    tracker.fail_on_tick = 2
    worker.start_process()
    assert emitted.errors == ["Worker Exception: camera unplugged"]
    assert tracker.stopped
    assert not worker.is_running

def test_failed_start_reports_error_and_releases_tracker(worker, tracker, emitted):
    tracker.start_result = False
    worker.start_process()
    assert tracker.ticks == 0
    assert len(emitted.errors) == 1
    assert tracker.stopped

def test_raising_start_is_reported_and_releases_tracker(worker, tracker, emitted):
    tracker.start_error = RuntimeError("no backend")
    worker.start_process()
    assert tracker.ticks == 0
    assert emitted.errors == ["Worker Exception: no backend"]
    assert tracker.stopped

def test_hand_lost_fires_once_when_hands_disappear(worker, tracker, emitted, make_pose):
    fist = HandLandmarks(landmarks=make_pose("fist"))
    tracker.frames = [[fist], [fist], [], []]
    tracker.on_tick = stop_at(worker, 4)
    worker.start_process()
    assert emitted.lost == [True]

def test_no_hand_lost_without_prior_hands(worker, tracker, emitted):
    tracker.on_tick = stop_at(worker, 3)
    worker.start_process()
    assert emitted.lost == []

def test_scene_changes_are_published_once_per_version(worker, tracker, emitted, make_pose):
    palm = HandLandmarks(landmarks=make_pose("open_palm"))
    tracker.frames = [[palm]] * 8
    tracker.on_tick = stop_at(worker, 8)
    worker.start_process()

    versions = [s.version for s in emitted.snapshots]
    assert versions == sorted(set(versions))
    last = emitted.snapshots[-1]
    assert [o.shape for o in last.objects] == [ShapeType.CUBE]
    assert last.selected_id == last.objects[0].id

def test_preview_frames_only_when_enabled(worker, tracker, emitted, config):
    tracker.on_tick = stop_at(worker, 2)
    worker.start_process()
    assert emitted.frames == []

    config.ui.show_preview = True
    tracker.ticks = 0
    worker.start_process()
    assert emitted.frames[0] == "frame"
    assert tracker.preview_colors[0] == DEFAULT_COLOR
