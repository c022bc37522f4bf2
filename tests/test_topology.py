# tests/test_topology.py
"""
TOPOLOGY TESTS: Elements -> Edges -> Springs
============================================

WHY THESE TESTS?
----------------
Neighbouring hexahedra share faces and edges. If deduplication fails, shared
edges get two springs and the mesh is twice as stiff there. If the degree
count is wrong, the fallback boundary rule pins the wrong vertices.

Checked here:
1. A single cube yields exactly 12 springs
2. Shared edges between elements produce one spring each
3. Every vertex's degree equals the number of springs that touch it
4. Degenerate input (repeated indices, coincident vertices) is dropped with a warning
"""

import logging
from collections import Counter

import numpy as np
import pytest

from hexspring.boundary import BoundaryConditions
from hexspring.config import SimulationConfig
from hexspring.errors import DegenerateSpringError, MeshFormatError, VertexIndexError
from hexspring.generative import BlockParams, generate_block
from hexspring.kernel.topology import EdgeKey, build_edge_set, build_springs, hex_element_edges
from hexspring.model import make_points
from hexspring.simulation import MassSpringSystem


UNIT_CUBE = [0, 1, 2, 3, 4, 5, 6, 7]


def block_edge_count(nx: int, ny: int, nz: int) -> int:
    """Number of distinct grid edges in an nx × ny × nz block."""
    return (
        nx * (ny + 1) * (nz + 1)
        + (nx + 1) * ny * (nz + 1)
        + (nx + 1) * (ny + 1) * nz
    )


class TestEdgeKey:

    def test_canonical_order(self):
        assert EdgeKey.of(7, 3) == EdgeKey(3, 7)
        assert EdgeKey.of(3, 7) == EdgeKey.of(7, 3)
        assert hash(EdgeKey.of(3, 7)) == hash(EdgeKey.of(7, 3))

    def test_loop_detection(self):
        assert EdgeKey.of(4, 4).is_loop
        assert not EdgeKey.of(4, 5).is_loop

    def test_sorting(self):
        keys = [EdgeKey.of(2, 1), EdgeKey.of(0, 5), EdgeKey.of(0, 3)]
        assert sorted(keys) == [EdgeKey(0, 3), EdgeKey(0, 5), EdgeKey(1, 2)]


class TestElementEdges:

    def test_cube_pattern(self):
        """Bottom face, top face and verticals, four each."""
        edges = set(hex_element_edges(UNIT_CUBE))

        expected = {
            EdgeKey(0, 1), EdgeKey(1, 2), EdgeKey(2, 3), EdgeKey(0, 3),
            EdgeKey(4, 5), EdgeKey(5, 6), EdgeKey(6, 7), EdgeKey(4, 7),
            EdgeKey(0, 4), EdgeKey(1, 5), EdgeKey(2, 6), EdgeKey(3, 7),
        }
        assert edges == expected

    def test_trailing_tag_ignored(self):
        assert hex_element_edges(UNIT_CUBE + [99]) == hex_element_edges(UNIT_CUBE)

    def test_short_element_rejected(self):
        with pytest.raises(MeshFormatError, match="needs 8"):
            hex_element_edges([0, 1, 2, 3])


class TestDeduplication:

    def test_same_element_twice(self):
        """Feeding one element twice must not double the spring count."""
        edges = build_edge_set([UNIT_CUBE, UNIT_CUBE])
        assert len(edges) == 12

    def test_face_sharing_elements(self):
        """Two cubes sharing a face: 12 + 12 - 4 shared edges."""
        mesh = generate_block(BlockParams(nx=2, ny=1, nz=1))
        edges = build_edge_set(mesh.elements)
        assert len(edges) == 20

    @pytest.mark.parametrize("n", [(1, 1, 1), (2, 2, 2), (3, 2, 1)])
    def test_block_edge_count(self, n):
        mesh = generate_block(BlockParams(nx=n[0], ny=n[1], nz=n[2]))
        edges = build_edge_set(mesh.elements)
        assert len(edges) == block_edge_count(*n)
        assert len(edges) <= 12 * mesh.n_elements

    def test_reversed_corner_order_is_same_edge_set(self):
        """Listing an element's faces in the opposite winding gives the same edges."""
        reversed_cube = [3, 2, 1, 0, 7, 6, 5, 4]
        assert build_edge_set([reversed_cube]) == build_edge_set([UNIT_CUBE])

    def test_degenerate_element_drops_loops(self, caplog):
        """A collapsed corner yields a self-edge, which is discarded and reported."""
        collapsed = [0, 0, 2, 3, 4, 5, 6, 7]
        with caplog.at_level(logging.WARNING, logger="hexspring"):
            edges = build_edge_set([collapsed])

        assert all(not e.is_loop for e in edges)
        assert EdgeKey(0, 0) not in edges
        assert len(edges) == 11
        assert "Dropped 1 self-edges" in caplog.text


class TestSprings:

    def test_degree_consistency(self):
        """Every vertex's degree equals the number of springs that reference it."""
        mesh = generate_block(BlockParams(nx=3, ny=2, nz=2))
        points = make_points(mesh.vertices)
        springs = build_springs(points, build_edge_set(mesh.elements))

        counts = Counter()
        for s in springs:
            counts[s.i] += 1
            counts[s.j] += 1

        for idx, p in enumerate(points):
            assert p.degree == counts[idx], \
                f"Vertex {idx}: degree {p.degree}, referenced by {counts[idx]} springs"

        assert sum(p.degree for p in points) == 2 * len(springs)

    def test_rest_length_is_initial_distance(self):
        mesh = generate_block(BlockParams(nx=1, ny=1, nz=1, width=2.0, depth=3.0, height=4.0))
        points = make_points(mesh.vertices)
        springs = build_springs(points, build_edge_set(mesh.elements))

        lengths = sorted(s.rest_len for s in springs)
        assert lengths == pytest.approx([2.0] * 4 + [3.0] * 4 + [4.0] * 4)
        for s in springs:
            assert s.cur_len == s.rest_len

    def test_springs_in_ascending_edge_order(self):
        mesh = generate_block(BlockParams(nx=2, ny=1, nz=1))
        points = make_points(mesh.vertices)
        springs = build_springs(points, build_edge_set(mesh.elements))
        pairs = [(s.i, s.j) for s in springs]
        assert pairs == sorted(pairs)
        assert all(i < j for i, j in pairs)

    def test_coincident_vertices_drop_one_spring(self, caplog):
        """Two distinct vertices at the same place lose their shared spring; the rest is built."""
        mesh = generate_block(BlockParams(nx=1, ny=1, nz=1))
        coords = mesh.vertices.copy()
        coords[1] = coords[0]
        points = make_points(coords)

        with caplog.at_level(logging.WARNING, logger="hexspring"):
            springs = build_springs(points, build_edge_set(mesh.elements))

        assert len(springs) == 11
        assert EdgeKey(0, 1) not in {EdgeKey(s.i, s.j) for s in springs}
        assert all(s.rest_len > 0 for s in springs)
        assert points[0].degree == 2
        assert points[1].degree == 2
        assert sum(p.degree for p in points) == 2 * len(springs)
        assert "Dropped 1 zero-length springs" in caplog.text

    def test_mesh_with_coincident_vertices_runs(self):
        """A duplicated coordinate in a two-element mesh still builds and relaxes."""
        mesh = generate_block(BlockParams(nx=2, ny=1, nz=1))
        # Vertex 1 lies on the shared face; drop its neighbour 0 onto it
        mesh.vertices[0] = mesh.vertices[1]

        system = MassSpringSystem.from_mesh(mesh, SimulationConfig(iterations=20))
        assert system.n_springs == block_edge_count(2, 1, 1) - 1

        system.apply(BoundaryConditions(fixed=[2, 5], displaced=[8]))
        result = system.run()

        assert result.iterations == 20
        assert np.all(np.isfinite(system.positions()))

    def test_self_edge_rejected(self):
        points = make_points([(0, 0, 0), (1, 0, 0)])
        with pytest.raises(DegenerateSpringError, match="to itself"):
            build_springs(points, [EdgeKey(1, 1)])

    def test_out_of_range_edge_rejected(self):
        points = make_points([(0, 0, 0), (1, 0, 0)])
        with pytest.raises(VertexIndexError):
            build_springs(points, [EdgeKey(0, 5)])
