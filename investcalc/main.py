from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List
import time

from investcalc.config import CORS_ORIGINS, TIMING_LOGS
from investcalc.derived import reset, resolve_derived_fields
from investcalc.land_tax import compute_land_tax
from investcalc.models import InvestmentInputs, Jurisdiction, parse_overrides
from investcalc.projection import PROJECTION_YEARS, project, projection_frame, year_stats

app = FastAPI(title="investcalc")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ResolveRequest(BaseModel):
    inputs: InvestmentInputs = Field(..., description="Full inputs snapshot from frontend")
    overrides: List[str] = Field(default_factory=list, description="Fields the user has edited by hand")


class ProjectRequest(ResolveRequest):
    view_year: int = 0


def _override_names(overrides) -> List[str]:
    return sorted(f.value for f in overrides)


def _log_timing(route: str, t0: float, t1: float, t2: float):
    if TIMING_LOGS:
        print(
            f"[timing] {route} parse={(t1-t0)*1000:.1f}ms | model={(t2-t1)*1000:.1f}ms | total={(t2-t0)*1000:.1f}ms",
            flush=True
        )


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/defaults")
def defaults():
    inputs, overrides = reset()
    return {"inputs": inputs.model_dump(mode="json"), "overrides": _override_names(overrides)}


@app.get("/land-tax")
def land_tax(jurisdiction: Jurisdiction, land_value: float = Query(..., allow_inf_nan=False)):
    return {
        "jurisdiction": jurisdiction.value,
        "land_value": land_value,
        "land_tax": compute_land_tax(land_value, jurisdiction),
    }


@app.post("/resolve")
def resolve(req: ResolveRequest):
    try:
        overrides = parse_overrides(req.overrides)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    resolved = resolve_derived_fields(req.inputs, overrides)
    return {"inputs": resolved.model_dump(mode="json"), "overrides": _override_names(overrides)}


@app.post("/project")
def project_endpoint(req: ProjectRequest):
    t0 = time.perf_counter()
    try:
        overrides = parse_overrides(req.overrides)
        if not 0 <= req.view_year <= PROJECTION_YEARS:
            raise ValueError(f"view_year must be between 0 and {PROJECTION_YEARS}")

        t1 = time.perf_counter()
        resolved = resolve_derived_fields(req.inputs, overrides)
        rows = project(resolved)
        stats = year_stats(rows, req.view_year)
        out = projection_frame(rows)
        t2 = time.perf_counter()
        _log_timing("/project", t0, t1, t2)
    except ValueError as e:
        print(f"[error] /project {e}", flush=True)
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "inputs": resolved.model_dump(mode="json"),
        "overrides": _override_names(overrides),
        "stats": stats.model_dump(),
        "mode": "yearly",
        "columns": out.columns.tolist(),
        "rows": out.to_dict(orient="records"),
    }
