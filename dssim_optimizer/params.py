from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import ConfigurationError


class Direction(Enum):
    INCREASE = "+"
    DECREASE = "-"

    @property
    def sign(self):
        return 1 if self is Direction.INCREASE else -1


@dataclass(frozen=True)
class TargetBand:
    """Accepted dissimilarity range, half-open: [lower, upper)."""

    lower: float = 0.008
    upper: float = 0.010

    def __post_init__(self):
        if self.lower < 0:
            raise ConfigurationError(
                f"DSSIM lower bound must be non-negative, got {self.lower}"
            )
        if self.lower >= self.upper:
            raise ConfigurationError(
                f"DSSIM lower bound {self.lower} must be below upper bound {self.upper}"
            )

    def classify(self, score: float) -> Optional[Direction]:
        """
        Map a score to the direction the quality has to move in.
        Returns None when the score is inside the band.
        """
        # too similar: the file is bigger than it needs to be
        if score < self.lower:
            return Direction.DECREASE
        # too different: artifacts beyond tolerance
        if score >= self.upper:
            return Direction.INCREASE
        return None

    def __contains__(self, score):
        return self.classify(score) is None


@dataclass(frozen=True)
class SearchConfig:
    """Tunables of one search run. Defaults are the classic cjpeg-dssim values."""

    initial_quality: int = 85
    initial_step: int = 25
    band: TargetBand = TargetBand()
    max_iterations: int = 10
    encoder: str = "jpegoptim"
    # None keeps the quality unclamped
    quality_bounds: Optional[Tuple[int, int]] = None

    def __post_init__(self):
        if self.max_iterations <= 0:
            raise ConfigurationError(
                f"max_iterations must be positive, got {self.max_iterations}"
            )
        if self.initial_step < 1:
            raise ConfigurationError(
                f"initial_step must be at least 1, got {self.initial_step}"
            )
        if self.quality_bounds is not None:
            low, high = self.quality_bounds
            if low > high:
                raise ConfigurationError(
                    f"quality_bounds {self.quality_bounds} are inverted"
                )
            if not low <= self.initial_quality <= high:
                raise ConfigurationError(
                    f"initial_quality {self.initial_quality} is outside quality_bounds {self.quality_bounds}"
                )


@dataclass(frozen=True)
class ToolPaths:
    """Executables for the external tools. Plain names are looked up in $PATH."""

    jpegoptim: str = "jpegoptim"
    mozjpeg: str = "mozjpeg"
    dssim: str = "dssim"
    convert: str = "convert"
