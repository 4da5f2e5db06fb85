"""
Config loader for Astris.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    use_gpu: bool = True


@dataclass
class GestureConfig:
    # All distances are in normalized landmark units
    pinch_threshold: float = 0.04
    thumb_extension_threshold: float = 0.05
    thumb_vertical_margin: float = 0.05   # Thumb tip above/below wrist for thumbs up/down
    victory_spread_threshold: float = 0.03
    persistence_frames: int = 5           # Frames a gesture must be held before it counts


@dataclass
class InteractionConfig:
    cooldown_ms: float = 600.0

    # Normalized hand position -> world units
    move_range_x: float = 16.0
    move_range_y: float = 12.0
    rotate_gain: float = 6.0              # Radians per full frame width of wrist travel

    # Two-hand scale mapping
    scale_gain: float = 5.0
    scale_min: float = 0.5
    scale_max: float = 6.0


@dataclass
class UIConfig:
    position: str = "right"
    show_preview: bool = True
    target_fps: int = 60


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        interaction=_dict_to_dataclass(InteractionConfig, data.get('interaction')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )
