# tests/test_api.py
"""
Smoke tests for the REST API, through FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from hexspring.generative import BlockParams, generate_block


@pytest.fixture
def client():
    return TestClient(app)


def cube_request(**overrides):
    mesh = generate_block(BlockParams(nx=1, ny=1, nz=1))
    body = {
        "vertices": mesh.vertices.tolist(),
        "elements": (mesh.elements + 1).tolist(),
        "fixed": [1, 2, 3, 4],
        "displaced": [5],
        "params": {"iterations": 10},
    }
    body.update(overrides)
    return body


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_simulate_cube(client):
    response = client.post("/api/simulate", json=cube_request())
    assert response.status_code == 200

    data = response.json()
    assert data["success"] is True
    assert len(data["positions"]) == 8
    assert len(data["edges"]) == 12
    assert data["fixed"] == [1, 2, 3, 4, 5]
    assert data["metrics"]["iterations"] == 10
    # Vertex 5 sits at (0, 0, 1) and is pulled by +0.2 in x
    assert data["positions"][4] == pytest.approx([0.2, 0.0, 1.0])


def test_simulate_accepts_tag_column(client):
    body = cube_request()
    body["elements"] = [e + [0] for e in body["elements"]]
    response = client.post("/api/simulate", json=body)
    assert response.status_code == 200
    assert len(response.json()["edges"]) == 12


def test_simulate_bad_element_index(client):
    body = cube_request(elements=[[1, 2, 3, 4, 5, 6, 7, 42]])
    response = client.post("/api/simulate", json=body)
    assert response.status_code == 400
    assert "outside 1..8" in response.json()["detail"]


def test_simulate_bad_fixed_index(client):
    response = client.post("/api/simulate", json=cube_request(fixed=[100]))
    assert response.status_code == 400
    assert "out of range" in response.json()["detail"]


def test_simulate_rejects_invalid_params(client):
    response = client.post("/api/simulate", json=cube_request(params={"timestep": -1.0}))
    assert response.status_code == 422


def test_block_endpoint(client):
    response = client.post("/api/block", json={
        "nx": 2, "ny": 2, "nz": 2,
        "params": {"iterations": 5},
    })
    assert response.status_code == 200

    data = response.json()
    assert len(data["positions"]) == 27
    assert len(data["edges"]) == 54
    # Bottom and top faces pinned, middle layer free
    assert len(data["fixed"]) == 18


def test_block_fallback_rule(client):
    response = client.post("/api/block", json={
        "nx": 2, "ny": 2, "nz": 2, "fixed_face": None, "pulled_face": "xmax",
        "params": {"iterations": 5},
    })
    assert response.status_code == 200
    # Every surface vertex is pinned by the degree fallback
    assert len(response.json()["fixed"]) == 26


def test_block_unknown_face(client):
    response = client.post("/api/block", json={"pulled_face": "front"})
    assert response.status_code == 400


def test_export_obj(client):
    response = client.post("/api/export/obj", json=cube_request())
    assert response.status_code == 200

    lines = response.text.splitlines()
    assert sum(1 for l in lines if l.startswith("v ")) == 8
    assert sum(1 for l in lines if l.startswith("l ")) == 12
