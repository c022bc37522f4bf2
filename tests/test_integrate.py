# tests/test_integrate.py
"""
TIME-STEPPING TESTS: Impulses, Integration, Driver Loop
=======================================================

Small hand-checkable systems:
- EQUILIBRIUM: a spring at rest length never moves anything
- STRETCH: a spring at twice its rest length gives a known first-step velocity
- SYMMETRY: the two ends of a spring always get equal and opposite impulses
- FIXED POINTS: pinned vertices never move, however long we run
"""

import logging

import pytest

from hexspring.boundary import BoundaryConditions, apply_boundary_conditions
from hexspring.config import SimulationConfig
from hexspring.generative import BlockParams, generate_block, block_face_vertices
from hexspring.kernel.integrate import (
    accumulate_spring_impulses,
    integrate_points,
    reset_impulses,
    run_simulation,
    simulation_step,
)
from hexspring.kernel.topology import EdgeKey, build_edge_set, build_springs
from hexspring.kernel.vector import Vector3
from hexspring.model import make_points


def make_pair(rest: float = 1.0):
    """Two free points on the x-axis joined by one spring of the given rest length."""
    points = make_points([(0.0, 0.0, 0.0), (rest, 0.0, 0.0)])
    springs = build_springs(points, [EdgeKey(0, 1)])
    return points, springs


class TestEquilibrium:

    def test_spring_at_rest_length_stays_put(self):
        points, springs = make_pair(rest=1.0)
        config = SimulationConfig(iterations=200)

        run_simulation(points, springs, config)

        assert points[0].position.as_tuple() == (0.0, 0.0, 0.0)
        assert points[1].position.as_tuple() == (1.0, 0.0, 0.0)
        assert points[0].velocity.as_tuple() == (0.0, 0.0, 0.0)
        assert points[1].velocity.as_tuple() == (0.0, 0.0, 0.0)

    def test_unloaded_block_stays_put(self):
        """A whole block with nothing pulled is already in equilibrium."""
        mesh = generate_block(BlockParams(nx=2, ny=2, nz=2))
        points = make_points(mesh.vertices)
        springs = build_springs(points, build_edge_set(mesh.elements))
        before = [p.position.as_tuple() for p in points]

        run_simulation(points, springs, SimulationConfig(iterations=30))

        assert [p.position.as_tuple() for p in points] == before


class TestStretch:

    def test_first_step_velocity_and_position(self):
        """
        Spring of rest length L stretched to 2L, no damping:
        |v| = k * L / m after one step, and each end moves v * dt towards the other.
        """
        k, m, dt = 0.03, 0.1, 0.1
        config = SimulationConfig(spring_k=k, point_mass=m, timestep=dt, damping=0.0)

        points, springs = make_pair(rest=1.0)
        points[1].position = Vector3(2.0, 0.0, 0.0)

        simulation_step(points, springs, config)

        v = k * 1.0 / m
        assert points[0].velocity.as_tuple() == pytest.approx((v, 0.0, 0.0))
        assert points[1].velocity.as_tuple() == pytest.approx((-v, 0.0, 0.0))
        assert points[0].position.x == pytest.approx(v * dt)
        assert points[1].position.x == pytest.approx(2.0 - v * dt)
        assert springs[0].cur_len == pytest.approx(2.0)

    def test_compressed_spring_pushes_apart(self):
        config = SimulationConfig(damping=0.0)
        points, springs = make_pair(rest=1.0)
        points[1].position = Vector3(0.5, 0.0, 0.0)

        simulation_step(points, springs, config)

        assert points[0].velocity.x < 0
        assert points[1].velocity.x > 0


class TestSymmetry:

    def test_equal_and_opposite_impulses_every_step(self):
        config = SimulationConfig(damping=0.0)
        points, springs = make_pair(rest=1.0)
        points[1].position = Vector3(1.5, 0.3, -0.2)

        for step in range(20):
            reset_impulses(points)
            accumulate_spring_impulses(points, springs, config)

            i0 = points[0].impulse.as_tuple()
            i1 = points[1].impulse.as_tuple()
            assert i0 == pytest.approx(tuple(-c for c in i1)), \
                f"Step {step}: impulses {i0} and {i1} not opposite"

            integrate_points(points, config)

    def test_damping_term_is_also_symmetric(self):
        config = SimulationConfig(damping=0.05)
        points, springs = make_pair(rest=1.0)
        points[0].velocity = Vector3(0.2, 0.0, 0.1)
        points[1].velocity = Vector3(-0.3, 0.1, 0.0)

        reset_impulses(points)
        accumulate_spring_impulses(points, springs, config)

        assert points[0].impulse.as_tuple() == pytest.approx(
            (-points[1].impulse).as_tuple()
        )
        # At rest length only damping acts: c * (v1·d - v2·d) with d = -x
        expected = 0.05 * (-0.2 - 0.3)
        assert points[0].impulse.x == pytest.approx(-expected)


class TestFixedPoints:

    def test_fixed_points_never_move(self):
        params = BlockParams(nx=2, ny=2, nz=2)
        mesh = generate_block(params)
        points = make_points(mesh.vertices)
        springs = build_springs(points, build_edge_set(mesh.elements))

        bc = BoundaryConditions(
            fixed=block_face_vertices(params, 'zmin'),
            displaced=block_face_vertices(params, 'zmax'),
        )
        apply_boundary_conditions(points, bc)

        pinned = [i for i, p in enumerate(points) if p.fixed]
        before = {i: (points[i].position.as_tuple(), points[i].velocity.as_tuple()) for i in pinned}

        run_simulation(points, springs, SimulationConfig(iterations=50))

        for i in pinned:
            assert points[i].position.as_tuple() == before[i][0], f"Pinned vertex {i} moved"
            assert points[i].velocity.as_tuple() == before[i][1], f"Pinned vertex {i} gained velocity"

        free = [p for p in points if not p.fixed]
        assert free, "Expected free vertices in the middle layer"
        assert any(p.position.x > 0.0 and p.velocity.mag() > 0 for p in free), \
            "Free vertices should follow the pulled face"


class TestDegenerateGeometry:

    def test_zero_length_spring_skipped(self):
        """Endpoints that meet during the run have no direction; the spring sits out that step."""
        points, springs = make_pair(rest=1.0)
        points[1].position = Vector3(0.0, 0.0, 0.0)

        reset_impulses(points)
        skipped = accumulate_spring_impulses(points, springs)

        assert skipped == 1
        assert points[0].impulse.mag() == 0.0
        assert points[1].impulse.mag() == 0.0
        assert springs[0].cur_len == 0.0

    def test_zero_length_skip_is_logged(self, caplog):
        points, springs = make_pair(rest=1.0)
        points[1].position = Vector3(0.0, 0.0, 0.0)

        with caplog.at_level(logging.DEBUG, logger="hexspring"):
            accumulate_spring_impulses(points, springs)

        assert "Skipped 1 zero-length springs" in caplog.text


class TestDriver:

    def test_runs_exact_iteration_count(self):
        points, springs = make_pair()
        points[1].position = Vector3(1.5, 0.0, 0.0)

        result = run_simulation(points, springs, SimulationConfig(iterations=37))

        assert result.iterations == 37
        assert not result.converged

    def test_zero_iterations_is_a_no_op(self):
        points, springs = make_pair()
        points[1].position = Vector3(1.5, 0.0, 0.0)

        result = run_simulation(points, springs, SimulationConfig(iterations=0))

        assert result.iterations == 0
        assert points[1].position.x == 1.5

    def test_convergence_tolerance_stops_early(self):
        points, springs = make_pair()
        config = SimulationConfig(iterations=100, convergence_tol=1e-9)

        result = run_simulation(points, springs, config)

        assert result.converged
        assert result.iterations == 1
        assert result.max_displacement == 0.0

    def test_deterministic(self):
        def final_positions():
            points, springs = make_pair()
            points[1].position = Vector3(1.7, 0.2, 0.0)
            run_simulation(points, springs, SimulationConfig(iterations=25))
            return [p.position.as_tuple() for p in points]

        assert final_positions() == final_positions()
