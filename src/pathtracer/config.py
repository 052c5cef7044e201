# config.py
from dataclasses import dataclass
from typing import Optional

# Maximum number of bounces per path
MAX_DEPTH = 50
# Smallest accepted hit distance, keeps bounced rays off their own surface
T_MIN = 0.001

DEFAULT_WIDTH = 400
DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_SAMPLES = 400
DEFAULT_SCENE = 3
DEFAULT_FOCUS_DIST = 10.0

# Named (samples per pixel, max depth) bundles
QUALITY_PRESETS = {
    "draft": (16, 8),
    "preview": (100, 25),
    "final": (DEFAULT_SAMPLES, MAX_DEPTH),
}


@dataclass
class RenderSettings:
    width: int = DEFAULT_WIDTH
    aspect_ratio: float = DEFAULT_ASPECT_RATIO
    samples_per_pixel: int = DEFAULT_SAMPLES
    max_depth: int = MAX_DEPTH
    aperture: float = 0.0
    seed: Optional[int] = None
    workers: int = 1

    def __post_init__(self):
        if self.width <= 0:
            raise ValueError(f"Image width must be positive, got {self.width}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"Aspect ratio must be positive, got {self.aspect_ratio}")
        if self.samples_per_pixel <= 0:
            raise ValueError(f"Samples per pixel must be positive, got {self.samples_per_pixel}")
        if self.workers <= 0:
            raise ValueError(f"Worker count must be positive, got {self.workers}")
        if self.height <= 0:
            raise ValueError(
                f"Image height {self.height} from width {self.width} and "
                f"aspect ratio {self.aspect_ratio} must be positive"
            )

    @property
    def height(self) -> int:
        return int(self.width / self.aspect_ratio)

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "RenderSettings":
        if name not in QUALITY_PRESETS:
            raise ValueError(f"Unknown quality preset {name!r}; choose from {sorted(QUALITY_PRESETS)}")
        samples, depth = QUALITY_PRESETS[name]
        overrides.setdefault("samples_per_pixel", samples)
        overrides.setdefault("max_depth", depth)
        return cls(**overrides)
