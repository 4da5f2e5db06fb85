"""
Astris - Hand-Gesture 3D Scene Construction

Entry point for the application.
"""
import argparse
import logging
import sys
import time
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Astris - Hand-Gesture Scene Construction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--camera",
        type=int,
        default=None,
        help="Camera device index (overrides config)",
    )

    parser.add_argument(
        "--position",
        choices=["left", "right"],
        default=None,
        help="Overlay position (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run the OpenCV debug view instead of the overlay",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging verbosity (default: INFO)",
    )

    return parser.parse_args()


def run_webcam_debug(config):
    """
    Run the pipeline in a plain OpenCV window with the skeleton overlay.
    Useful for checking thresholds from a given camera distance.
    """
    import cv2
    from webcam.hand_tracker import HandTracker
    from interaction import GesturePipeline
    from scene import SceneStore
    from ui.palette import skeleton_color

    store = SceneStore()
    tracker = HandTracker(config)
    pipeline = GesturePipeline(config, store)

    print("Starting webcam debug mode...")
    print("Press 'r' to reset the scene, 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not start hand tracker")
        return 1

    try:
        while True:
            hands = tracker.get_hands()
            result = pipeline.process([h.landmarks for h in hands], time.monotonic() * 1000.0)

            frame = tracker.get_frame_with_landmarks(hands, color=skeleton_color(result.effective))

            if frame is not None:
                snapshot = store.snapshot()
                cv2.putText(
                    frame, f"Gesture: {result.effective.name}", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 255, 0), 2
                )

                info_lines = [
                    f"Mode: {snapshot.mode.value}",
                    f"Raw: {result.raw.name}  Hands: {result.hand_count}",
                    f"Scale dist: {result.scale_distance:.3f}",
                    f"Objects: {len(snapshot.objects)}",
                ]
                info_lines.extend(snapshot.history)
                for i, line in enumerate(info_lines):
                    cv2.putText(
                        frame, line, (10, 60 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                    )

                if result.action is not None:
                    print(f"[{tracker.frame_count:5d}] {result.effective.name} -> {result.action.name}")

                cv2.imshow("Astris Debug", frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            if key == ord('r'):
                store.reset_scene()

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_overlay_mode(config):
    """Run Astris with the status overlay (frame loop in a worker thread)."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from scene import SceneStore
    from webcam.worker import WebcamWorker
    from ui import StatusOverlay

    app = QApplication(sys.argv)

    store = SceneStore()

    overlay = StatusOverlay(position=config.ui.position, on_reset=store.reset_scene)
    overlay.show()
    overlay.activateWindow()

    thread = QThread()
    worker = WebcamWorker(config, store)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    # Queued connections so UI updates happen in the main thread
    thread.started.connect(worker.start_process)
    worker.scene_changed.connect(overlay.set_snapshot, Qt.QueuedConnection)
    worker.frame_ready.connect(overlay.set_webcam_frame, Qt.QueuedConnection)
    worker.hand_lost.connect(overlay.clear_gesture, Qt.QueuedConnection)
    worker.error.connect(lambda msg: print(f"WORKER ERROR: {msg}"), Qt.QueuedConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main():
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    from webcam import load_config
    config = load_config(args.config)

    # Apply CLI overrides
    if args.camera is not None:
        config.camera.device_id = args.camera
    if args.position:
        config.ui.position = args.position

    print("Astris starting...")
    print(f"  Camera: {config.camera.device_id}")
    print(f"  Max hands: {config.mediapipe.max_num_hands}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_overlay_mode(config)


if __name__ == "__main__":
    sys.exit(main())
