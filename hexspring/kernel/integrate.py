# hexspring/kernel/integrate.py
"""
INTEGRATION: One Mass-Spring Time Step and the Driver Loop
==========================================================

PURPOSE:
--------
Advance the point masses by one explicit time step, and repeat that for a
fixed number of iterations.

Every step runs three phases, in this order and never interleaved:

    1. reset_impulses()              impulse = 0 for every point
    2. accumulate_spring_impulses()  each spring pushes/pulls its two ends
    3. integrate_points()            v += impulse / m ;  x += v * dt

SPRING IMPULSE:
---------------
For a spring between p1 and p2 with unit direction d = (x1 - x2) / |x1 - x2|:

    magnitude = k * (rest_len - cur_len)
              + c * (v1 · d - v2 · d)

    p1.impulse += d * magnitude
    p2.impulse -= d * magnitude

rest_len - cur_len is positive when the spring is compressed (the ends are
pushed apart) and negative when stretched (the ends are pulled together),
so one formula covers both regimes. The two endpoints always receive equal
and opposite impulses.

INTEGRATION:
------------
Semi-implicit Euler: the velocity is updated first from this step's impulse,
then the position is advanced with the new velocity. Fixed points are skipped
entirely, so their position and velocity never change.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from tqdm import tqdm

from ..config import SimulationConfig, DEFAULT_CONFIG
from ..model import Point, Spring
from .vector import distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResult:
    """
    Outcome of a driver run.

    iterations : int
        Steps actually executed
    converged : bool
        True only when convergence_tol was set and reached
    max_displacement : float
        Largest single-point displacement during the last step
    """
    iterations: int
    converged: bool
    max_displacement: float


def reset_impulses(points: Sequence[Point]) -> None:
    for p in points:
        p.impulse.set_zero()


def accumulate_spring_impulses(
    points: Sequence[Point],
    springs: Sequence[Spring],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> int:
    """
    Add every spring's impulse to its two endpoints.

    A spring whose endpoints currently coincide has no direction and is
    skipped for this step.

    Returns:
    --------
    int
        Number of springs skipped because their current length is zero.
    """
    k = config.spring_k
    c = config.damping
    skipped = 0

    for spring in springs:
        p1 = points[spring.i]
        p2 = points[spring.j]

        spring.cur_len = distance(p1.position, p2.position)
        if spring.cur_len == 0.0:
            skipped += 1
            continue

        direction = (p1.position - p2.position).normalize()
        magnitude = k * (spring.rest_len - spring.cur_len)
        magnitude += c * (p1.velocity.dot(direction) - p2.velocity.dot(direction))

        p1.impulse = p1.impulse + direction * magnitude
        p2.impulse = p2.impulse + (-direction) * magnitude

    if skipped:
        logger.debug("Skipped %d zero-length springs this step", skipped)
    return skipped


def integrate_points(
    points: Sequence[Point],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> float:
    """
    Update velocity and position of every free point.

    Returns:
    --------
    float
        Largest distance moved by any point during this step.
    """
    dt = config.timestep
    mass = config.point_mass
    max_move = 0.0

    for p in points:
        if p.fixed:
            continue
        if p.impulse.mag() != 0.0:
            p.velocity = p.velocity + p.impulse / mass

        move = p.velocity * dt
        p.position = p.position + move
        max_move = max(max_move, move.mag())

    return max_move


def simulation_step(
    points: Sequence[Point],
    springs: Sequence[Spring],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> float:
    """Run the three phases once. Returns the step's largest point displacement."""
    reset_impulses(points)
    accumulate_spring_impulses(points, springs, config)
    return integrate_points(points, config)


def run_simulation(
    points: Sequence[Point],
    springs: Sequence[Spring],
    config: SimulationConfig = DEFAULT_CONFIG,
    progress: bool = False,
) -> SimulationResult:
    """
    Repeat simulation_step() config.iterations times.

    There is no convergence check unless config.convergence_tol is set, in
    which case the loop stops after the first step whose largest point
    displacement falls below it. With identical inputs the result is
    identical; nothing here is random.

    Parameters:
    -----------
    progress : bool
        Show a tqdm progress bar over the iterations
    """
    tol = config.convergence_tol
    steps = range(config.iterations)
    iterator = tqdm(steps, desc="Relaxing", unit="step") if progress else steps

    logger.info(
        "Simulating %d points, %d springs for %d iterations (dt=%g)",
        len(points), len(springs), config.iterations, config.timestep,
    )

    done = 0
    max_move = 0.0
    converged = False
    for it in iterator:
        max_move = simulation_step(points, springs, config)
        done += 1
        logger.debug("Iteration %d: max displacement %.3e", it + 1, max_move)
        if tol is not None and max_move < tol:
            converged = True
            break

    if converged:
        logger.info("Converged after %d iterations (max displacement %.3e)", done, max_move)
    else:
        logger.info("Finished %d iterations (last max displacement %.3e)", done, max_move)

    return SimulationResult(iterations=done, converged=converged, max_displacement=max_move)
