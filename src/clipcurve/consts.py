"""Central module containing the numeric tuning constants and hit-test settings"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from clipcurve.common import HitTestStrategy

###############################################################################
# Consts
###############################################################################

# Newton-Raphson nearest-point search
NEWTON_SEED_COUNT: int = 11  # evenly spaced seeds t = 0, 0.1, ..., 1
NEWTON_MAX_ITERATIONS: int = 10
NEWTON_TOLERANCE: float = 1.0e-6  # for |D'|, |D''| and the step size

# Relative band around zero for the discriminant of the depressed cubic (and for p, q)
CUBIC_DISCRIMINANT_EPSILON: float = 1.0e-12

# Slack added to the hit-test threshold to absorb Newton round-off
HIT_DISTANCE_EPSILON: float = 1.0e-6


###############################################################################
# HitTestSettings
###############################################################################


@dataclass(frozen=True)
class HitTestSettings:
    """Tuning of the hit-test for quadratic and cubic curves.

    Attributes:
        strategy: Algorithm used to find the parameter of the nearest point.
        seed_count: Number of evenly spaced Newton starting values over [0, 1].
        max_iterations: Maximum Newton steps per seed.
        tolerance: Convergence tolerance for the derivatives and the step size.
        hit_epsilon: Slack added to the caller's threshold.
    """

    strategy: HitTestStrategy = HitTestStrategy.NEAREST_POINT
    seed_count: int = NEWTON_SEED_COUNT
    max_iterations: int = NEWTON_MAX_ITERATIONS
    tolerance: float = NEWTON_TOLERANCE
    hit_epsilon: float = HIT_DISTANCE_EPSILON

    def __post_init__(self):
        if self.seed_count < 2:
            raise ValueError(f"seed_count must be at least 2, got {self.seed_count}")
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {self.max_iterations}")
        if self.tolerance <= 0.0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.hit_epsilon < 0.0:
            raise ValueError(f"hit_epsilon must be non-negative, got {self.hit_epsilon}")

    @property
    def seeds(self) -> Tuple[float, ...]:
        """Newton starting values, evenly spaced over [0, 1] including both ends."""
        last = self.seed_count - 1
        return tuple(i / last for i in range(self.seed_count))

    def to_dict(self) -> dict:
        """Convert settings to a dictionary."""
        return {
            "strategy": self.strategy.name,
            "seed_count": self.seed_count,
            "max_iterations": self.max_iterations,
            "tolerance": self.tolerance,
            "hit_epsilon": self.hit_epsilon,
        }

    @classmethod
    def from_dict(cls, data: dict) -> HitTestSettings:
        """Create HitTestSettings from a dictionary, missing keys take the defaults."""
        return cls(
            strategy=HitTestStrategy[data.get("strategy", HitTestStrategy.NEAREST_POINT.name)],
            seed_count=data.get("seed_count", NEWTON_SEED_COUNT),
            max_iterations=data.get("max_iterations", NEWTON_MAX_ITERATIONS),
            tolerance=data.get("tolerance", NEWTON_TOLERANCE),
            hit_epsilon=data.get("hit_epsilon", HIT_DISTANCE_EPSILON),
        )

    def __str__(self):
        return (
            f"HitTestSettings(strategy={self.strategy.name}, seeds={self.seed_count}, "
            f"iterations={self.max_iterations}, tolerance={self.tolerance:g}, "
            f"hit_epsilon={self.hit_epsilon:g})"
        )


# Process-wide default used when no settings are passed to a hit-test
DEFAULT_HIT_TEST_SETTINGS = HitTestSettings()

# Reproduces the historical per-axis hit-test
AXIS_ROOTS_HIT_TEST_SETTINGS = HitTestSettings(strategy=HitTestStrategy.AXIS_ROOTS)
