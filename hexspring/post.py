# hexspring/post.py
"""
POST-PROCESSING: Results Tables and Summary Metrics
===================================================

Turn a relaxed MassSpringSystem into something a person (or a spreadsheet)
can read:

- results_frame(): one row per vertex with initial/final coordinates,
  displacement, fixed flag and spring count
- spring_frame(): one row per spring with rest/current length and strain
- summary(): a flat dict of headline numbers for printing or JSON
"""

from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from .kernel.integrate import SimulationResult
from .simulation import MassSpringSystem


def results_frame(system: MassSpringSystem) -> pd.DataFrame:
    """
    Per-vertex results.

    Columns:
    --------
    vertex           1-based vertex id (matches the .hex / .obj numbering)
    x0, y0, z0       position as loaded
    x, y, z          current position
    dx, dy, dz       current minus loaded position
    displacement     Euclidean norm of (dx, dy, dz)
    fixed            pinned by a boundary condition
    degree           number of attached springs
    """
    initial = system.initial_positions()
    current = system.positions()
    delta = current - initial

    return pd.DataFrame({
        'vertex': np.arange(1, system.n_points + 1),
        'x0': initial[:, 0], 'y0': initial[:, 1], 'z0': initial[:, 2],
        'x': current[:, 0], 'y': current[:, 1], 'z': current[:, 2],
        'dx': delta[:, 0], 'dy': delta[:, 1], 'dz': delta[:, 2],
        'displacement': np.linalg.norm(delta, axis=1),
        'fixed': system.fixed_mask(),
        'degree': system.degrees(),
    })


def spring_frame(system: MassSpringSystem) -> pd.DataFrame:
    """Per-spring lengths and strain (1-based endpoints)."""
    return pd.DataFrame({
        'node_i': [s.i + 1 for s in system.springs],
        'node_j': [s.j + 1 for s in system.springs],
        'rest_len': [s.rest_len for s in system.springs],
        'cur_len': [s.cur_len for s in system.springs],
        'strain': system.spring_strains(),
    })


def summary(system: MassSpringSystem, result: Optional[SimulationResult] = None) -> Dict[str, Any]:
    """Headline metrics of a run."""
    df = results_frame(system)
    free = df[~df['fixed']]
    strains = system.spring_strains()

    metrics = {
        'n_points': system.n_points,
        'n_springs': system.n_springs,
        'n_fixed': int(df['fixed'].sum()),
        'max_displacement': float(df['displacement'].max()) if len(df) else 0.0,
        'max_free_displacement': float(free['displacement'].max()) if len(free) else 0.0,
        'max_abs_strain': float(np.abs(strains).max()) if len(strains) else 0.0,
    }
    if result is not None:
        metrics['iterations'] = result.iterations
        metrics['converged'] = result.converged
        metrics['last_step_displacement'] = result.max_displacement
    return metrics
