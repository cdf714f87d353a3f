# zoo_tool_api.py
# Optional FastAPI wrapper for the engine tools.
# Run with: uvicorn apps.api.zoo_tool_api:app --reload

from typing import Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from zootiles.solver_core import Constraints, ZooTilesError
from zootiles.zoo_tools import (
    compute_candidates_tool,
    generate_tool,
    grid_configs_tool,
    make_constraints,
    placement_tool,
    sanity_check,
    solve_tool,
    validate_tool,
)

app = FastAPI(title="Zoo-Tiles Engine API")

ValueGridModel = list[list[Optional[str]]]


class ConstraintsModel(BaseModel):
    size: int = 6
    subgrid_rows: Optional[int] = None
    subgrid_cols: Optional[int] = None
    alphabet: Optional[list[str]] = None


class GridRequest(ConstraintsModel):
    grid: ValueGridModel


class PlacementRequest(GridRequest):
    row: int = Field(ge=0)
    col: int = Field(ge=0)
    value: Optional[str] = None


class SanityRequest(ConstraintsModel):
    original: ValueGridModel
    current: ValueGridModel


class GenerateRequest(ConstraintsModel):
    difficulty: Union[float, str] = "Medium"
    seed: Optional[int] = None
    unique: bool = False


def _constraints(req: ConstraintsModel) -> Constraints:
    try:
        return make_constraints(req.size, req.subgrid_rows, req.subgrid_cols, req.alphabet)
    except ZooTilesError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _run(fn, *args):
    try:
        return fn(*args)
    except ZooTilesError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/grid_configs")
def api_grid_configs():
    return grid_configs_tool()


@app.post("/validate")
def api_validate(req: GridRequest):
    return _run(validate_tool, req.grid, _constraints(req))


@app.post("/is_valid_placement")
def api_placement(req: PlacementRequest):
    c = _constraints(req)
    if req.row >= c.grid_size or req.col >= c.grid_size:
        raise HTTPException(status_code=422, detail=f"cell ({req.row}, {req.col}) is outside a {c.grid_size}x{c.grid_size} grid")
    return _run(placement_tool, req.grid, c, req.row, req.col, req.value)


@app.post("/compute_candidates")
def api_cands(req: GridRequest):
    return _run(compute_candidates_tool, req.grid, _constraints(req))


@app.post("/solve")
def api_solve(req: GridRequest):
    return _run(solve_tool, req.grid, _constraints(req))


@app.post("/generate")
def api_generate(req: GenerateRequest):
    return _run(generate_tool, _constraints(req), req.difficulty, req.seed, req.unique)


@app.post("/sanity_check")
def api_sanity(req: SanityRequest):
    return _run(sanity_check, req.original, req.current, _constraints(req))
