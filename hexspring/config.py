# hexspring/config.py
"""
Simulation configuration and defaults.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class SimulationConfig:
    """Physical constants and run settings for the mass-spring relaxation."""

    # Point masses
    point_mass: float = 0.1

    # Springs
    spring_k: float = 0.03
    damping: float = 1e-7

    # Time stepping
    timestep: float = 0.1
    iterations: int = 150

    # Boundary conditions
    min_degree: int = 6  # fallback: vertices with fewer springs are pinned
    pull_offset: Tuple[float, float, float] = (0.2, 0.0, 0.0)

    # Optional early exit: stop once the largest per-step displacement is below this
    convergence_tol: Optional[float] = None

    def __post_init__(self):
        if self.point_mass <= 0:
            raise ValueError(f"point_mass must be positive, got {self.point_mass}")
        if self.timestep <= 0:
            raise ValueError(f"timestep must be positive, got {self.timestep}")
        if self.iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {self.iterations}")
        if len(self.pull_offset) != 3:
            raise ValueError(f"pull_offset must have 3 components, got {self.pull_offset!r}")
        if self.convergence_tol is not None and self.convergence_tol <= 0:
            raise ValueError(f"convergence_tol must be positive, got {self.convergence_tol}")

    def with_overrides(self, **overrides) -> "SimulationConfig":
        """Copy of this config with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if 'pull_offset' in changes:
            changes['pull_offset'] = tuple(float(c) for c in changes['pull_offset'])
        return replace(self, **changes)


# Global default instance
DEFAULT_CONFIG = SimulationConfig()
