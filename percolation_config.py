"""Run parameters for the percolation threshold estimator and sweeps."""

import os
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

# z-score of the two-sided 95% normal confidence interval
CONFIDENCE_Z = 1.96

ENGINES = ("python", "numba")

# finite-size scaling exponent used by the extrapolation plot (-1/nu, nu = 4/3)
SCALING_EXPONENT = -3 / 4

DEFAULT_LOG_LEVEL = os.environ.get("PERCOLATION_LOG_LEVEL", "WARNING")


@dataclass
class StatsConfig:
    """Parameters for a single threshold estimate.

    Attributes:
        n: Side length of the square grid.
        trials: Number of independent Monte Carlo trials.
        seed: Optional seed (int or SeedSequence) for reproducible results.
        engine: "python" (object grid) or "numba" (jitted array kernel).
        workers: Number of processes used to run trials.
    """
    n: int
    trials: int
    seed: Optional[Union[int, np.random.SeedSequence]] = None
    engine: str = "python"
    workers: int = 1

    def __post_init__(self):
        if self.n <= 0 or self.trials <= 0:
            raise ValueError(
                f"grid size n and trials count must be positive integers, "
                f"got n={self.n}, trials={self.trials}"
            )
        if self.engine not in ENGINES:
            raise ValueError(f"engine must be one of {ENGINES}, got {self.engine!r}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")


@dataclass
class SweepConfig:
    """Grid sizes Lmin, Lmin + Lstep, ..., up to Lmax, each run for `trials` trials."""
    Lmin: int = 50
    Lmax: int = 200
    Lstep: int = 50
    trials: int = 500
    seed: Optional[Union[int, np.random.SeedSequence]] = None
    engine: str = "python"
    workers: int = 1

    def __post_init__(self):
        if self.Lmin <= 0 or self.Lstep <= 0:
            raise ValueError("Lmin and Lstep must be positive integers")
        if self.Lmax < self.Lmin:
            raise ValueError(f"Lmax ({self.Lmax}) must be >= Lmin ({self.Lmin})")
        if self.trials <= 0:
            raise ValueError("trials count must be a positive integer")
        if self.engine not in ENGINES:
            raise ValueError(f"engine must be one of {ENGINES}, got {self.engine!r}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    def sizes(self):
        return list(range(self.Lmin, self.Lmax + 1, self.Lstep))
