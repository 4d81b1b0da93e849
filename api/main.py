# api/main.py
"""
FastAPI backend for reservoir_arm - grows arm networks over REST.
"""

from typing import List

import numpy as np
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from reservoir_arm import __version__
from reservoir_arm.config import CONFIG
from reservoir_arm.export import to_connection_map_csv, to_masses_csv
from reservoir_arm.grammar import GrammarDslParser, ParserError, SymbolExpander
from reservoir_arm.pipeline import build_network

app = FastAPI(
    title="Reservoir Arm API",
    description="Grammar-grown mass-spring networks for a robot arm",
    version=__version__
)

# CORS for frontend
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

class DevelopRequest(BaseModel):
    """Grammar text, seed and RNG seed for one growth run."""
    grammar: str = Field(..., description="DSL text (shoulder, elbow, hand, input, ...)")
    initialisation: str = Field("", description="Seed expanded with the production rules")
    seed: int = Field(CONFIG.default_seed, ge=0, description="Random seed")


class ExpandRequest(BaseModel):
    """Grammar text (for its production rules) and the seed to expand."""
    grammar: str = Field("", description="DSL text; only productionRules lines matter")
    initialisation: str = Field(..., description="Seed such as A(3){BC}")


class ErrorData(BaseModel):
    """One parser error."""
    line_index: int
    message: str


class MassData(BaseModel):
    """Mass geometry and type."""
    index: int
    x: float
    y: float
    type: str
    code: str


class SpringData(BaseModel):
    """Spring in export order (higher index first)."""
    higher: int
    lower: int
    connection_type: str
    code: int


class DevelopResult(BaseModel):
    """Grown network and the errors of every stage."""
    construction: str
    masses: List[MassData]
    springs: List[SpringData]
    grammar_errors: List[ErrorData]
    seed_errors: List[ErrorData]
    construction_errors: List[ErrorData]


class ExpandResult(BaseModel):
    """Expanded seed."""
    output: str
    errors: List[ErrorData]


def _errors(errors: List[ParserError]) -> List[ErrorData]:
    return [ErrorData(line_index=e.line_index, message=e.message) for e in errors]


# =============================================================================
# Network Generation
# =============================================================================

def develop_network(request: DevelopRequest) -> DevelopResult:
    """Run parse, expand and grow; serialise the graph in export order."""
    result = build_network(request.grammar, request.initialisation,
                           np.random.default_rng(request.seed))
    graph = result.model.graph
    indices = graph.index_map()

    masses = [
        MassData(index=i, x=m.x, y=m.y, type=m.type.name, code=m.type.code)
        for i, m in enumerate(graph.masses)
    ]

    springs = []
    for spring in graph.sorted_springs():
        i, j = indices[id(spring.source)], indices[id(spring.destination)]
        springs.append(SpringData(
            higher=max(i, j), lower=min(i, j),
            connection_type=spring.connection_type.name,
            code=spring.connection_type.value,
        ))

    return DevelopResult(
        construction=result.construction,
        masses=masses,
        springs=springs,
        grammar_errors=_errors(result.grammar_errors),
        seed_errors=_errors(result.seed_errors),
        construction_errors=_errors(result.construction_errors),
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/health")
async def health():
    """Health check."""
    return {"status": "ok", "service": "Reservoir Arm API"}


@app.post("/api/develop", response_model=DevelopResult)
async def develop(request: DevelopRequest):
    """Grow a network from grammar + initialisation."""
    return develop_network(request)


@app.post("/api/expand", response_model=ExpandResult)
async def expand(request: ExpandRequest):
    """Expand the initialisation with the grammar's production rules."""
    model, _ = GrammarDslParser().parse(request.grammar)
    output, errors = SymbolExpander(model.production_rules).parse(request.initialisation)
    return ExpandResult(output=output, errors=_errors(errors))


@app.post("/api/export/masses", response_class=PlainTextResponse)
async def export_masses(request: DevelopRequest):
    """Masses CSV of the grown network."""
    result = build_network(request.grammar, request.initialisation,
                           np.random.default_rng(request.seed))
    return PlainTextResponse(to_masses_csv(result.model.graph), media_type="text/csv")


@app.post("/api/export/connections", response_class=PlainTextResponse)
async def export_connections(request: DevelopRequest):
    """Connection map CSV of the grown network."""
    result = build_network(request.grammar, request.initialisation,
                           np.random.default_rng(request.seed))
    return PlainTextResponse(to_connection_map_csv(result.model.graph), media_type="text/csv")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
