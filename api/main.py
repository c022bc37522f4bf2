# api/main.py
"""
FastAPI backend for hexspring - exposes the mass-spring engine as a REST API.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Any, Tuple
import sys
from pathlib import Path

# Add project root to path to import hexspring
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexspring.boundary import BoundaryConditions
from hexspring.config import DEFAULT_CONFIG
from hexspring.errors import HexSpringError
from hexspring.generative import BlockParams, generate_block, block_face_vertices
from hexspring.io import format_obj
from hexspring.model import HexMesh
from hexspring.post import summary
from hexspring.simulation import MassSpringSystem
import numpy as np


app = FastAPI(
    title="hexspring API",
    description="Mass-spring relaxation of hexahedral meshes",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class SimulationParams(BaseModel):
    """Overrides for the simulation constants. Unset fields keep the defaults."""
    point_mass: Optional[float] = Field(None, gt=0, description="Mass of each vertex")
    spring_k: Optional[float] = Field(None, ge=0, description="Spring constant")
    damping: Optional[float] = Field(None, ge=0, description="Damping constant")
    timestep: Optional[float] = Field(None, gt=0, description="Time step")
    iterations: Optional[int] = Field(None, ge=0, le=100000, description="Number of steps")
    pull_offset: Optional[Tuple[float, float, float]] = Field(None, description="Offset of displaced vertices")
    convergence_tol: Optional[float] = Field(None, gt=0, description="Early-exit threshold")


class MeshRequest(BaseModel):
    """A mesh plus boundary conditions, indices 1-based as in the file formats."""
    vertices: List[Tuple[float, float, float]]
    elements: List[List[int]] = Field(..., description="8 vertex ids per hexahedron (a 9th tag value is ignored)")
    fixed: List[int] = Field(default_factory=list)
    displaced: List[int] = Field(default_factory=list)
    params: SimulationParams = Field(default_factory=SimulationParams)


class BlockRequest(BaseModel):
    """A generated block with one face pulled."""
    nx: int = Field(3, ge=1, le=20)
    ny: int = Field(3, ge=1, le=20)
    nz: int = Field(3, ge=1, le=20)
    width: float = Field(1.0, gt=0)
    depth: float = Field(1.0, gt=0)
    height: float = Field(1.0, gt=0)
    fixed_face: Optional[str] = Field("zmin", description="Face to pin, or null for the fallback rule")
    pulled_face: str = Field("zmax", description="Face to displace")
    params: SimulationParams = Field(default_factory=SimulationParams)


class SimulationResponse(BaseModel):
    """Relaxed geometry and metrics."""
    success: bool
    error: Optional[str] = None
    positions: Optional[List[Tuple[float, float, float]]] = None
    edges: Optional[List[Tuple[int, int]]] = None
    fixed: Optional[List[int]] = None
    metrics: Optional[Dict[str, Any]] = None


# =============================================================================
# Simulation
# =============================================================================

def _mesh_from_request(req: MeshRequest) -> HexMesh:
    for k, element in enumerate(req.elements):
        if len(element) not in (8, 9):
            raise HTTPException(status_code=400, detail=f"Element {k + 1} has {len(element)} values, expected 8")
    vertices = np.array(req.vertices, dtype=float).reshape(-1, 3)
    elements = np.array([e[:8] for e in req.elements], dtype=int).reshape(-1, 8)
    n = len(vertices)
    if elements.size and (elements.min() < 1 or elements.max() > n):
        raise HTTPException(status_code=400, detail=f"Element references a vertex outside 1..{n}")
    return HexMesh(vertices=vertices, elements=elements - 1)


def simulate(mesh: HexMesh, bc: BoundaryConditions, params: SimulationParams) -> SimulationResponse:
    """Build, constrain and relax a mesh. Input errors come back as success=False."""
    try:
        config = DEFAULT_CONFIG.with_overrides(**params.model_dump())
        system = MassSpringSystem.from_mesh(mesh, config)
        system.apply(bc)
        result = system.run()
    except (HexSpringError, ValueError) as e:
        return SimulationResponse(success=False, error=str(e))

    positions = [tuple(round(float(c), 6) for c in row) for row in system.positions()]
    fixed_ids = [int(i) + 1 for i in np.flatnonzero(system.fixed_mask())]

    return SimulationResponse(
        success=True,
        positions=positions,
        edges=system.edges(),
        fixed=fixed_ids,
        metrics=summary(system, result),
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "hexspring API"}


@app.post("/api/simulate", response_model=SimulationResponse)
async def simulate_mesh(req: MeshRequest):
    """Relax a user-supplied mesh."""
    mesh = _mesh_from_request(req)
    bc = BoundaryConditions(
        fixed=[i - 1 for i in req.fixed],
        displaced=[i - 1 for i in req.displaced],
    )
    result = simulate(mesh, bc, req.params)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    return result


def _block_case(req: BlockRequest) -> Tuple[HexMesh, BoundaryConditions]:
    try:
        params = BlockParams(
            nx=req.nx, ny=req.ny, nz=req.nz,
            width=req.width, depth=req.depth, height=req.height,
        )
        fixed = block_face_vertices(params, req.fixed_face) if req.fixed_face else []
        displaced = block_face_vertices(params, req.pulled_face)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return generate_block(params), BoundaryConditions(fixed=fixed, displaced=displaced)


@app.post("/api/block", response_model=SimulationResponse)
async def simulate_block(req: BlockRequest):
    """Generate a block, pin one face, pull another and relax it."""
    mesh, bc = _block_case(req)
    result = simulate(mesh, bc, req.params)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    return result


@app.post("/api/export/obj")
async def export_obj(req: MeshRequest):
    """Relax a mesh and return the wireframe as an .obj file."""
    result = await simulate_mesh(req)

    return StreamingResponse(
        iter([format_obj(result.positions, result.edges)]),
        media_type="text/plain",
        headers={"Content-Disposition": "attachment; filename=relaxed.obj"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
