"""
Astris Webcam Module

Hand landmark classification and stabilization. The MediaPipe tracker and the
Qt frame-loop worker live in `webcam.hand_tracker` and `webcam.worker`; they
are not imported here so the gesture logic loads without camera libraries.
"""
from .config import Config, load_config
from .landmarks import HandLandmarks
from .gesture_classifier import GestureClassifier, GestureType
from .stabilizer import GestureStabilizer, StabilizerState

__all__ = [
    'Config',
    'load_config',
    'HandLandmarks',
    'GestureClassifier',
    'GestureType',
    'GestureStabilizer',
    'StabilizerState',
]
