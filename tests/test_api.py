# tests/test_api.py
"""
REST API tests via FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app

GRAMMAR = "\n".join([
    "shoulder 0 0",
    "elbow 0 5",
    "hand 0 10",
    "input 0 1",
    "input 0 4",
    "input 0 6",
    "input 0 9",
    "productionRules A->aac B->cAc",
    "createMass a [1, 3]",
    "createSpring c [0.5, 4]",
    "randomSprings 3",
])


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_expand(client):
    response = client.post("/api/expand", json={
        "grammar": "productionRules A->a B->bb C->BB",
        "initialisation": "ABC",
    })
    assert response.status_code == 200
    assert response.json() == {"output": "abbBB", "errors": []}


def test_expand_reports_errors(client):
    response = client.post("/api/expand", json={"initialisation": "A?"})
    body = response.json()
    assert body["output"] == "A?"
    assert body["errors"] == [{"line_index": 1, "message": "Could not understand the symbol: ?"}]


def test_develop(client):
    response = client.post("/api/develop", json={
        "grammar": GRAMMAR, "initialisation": "A(2){B}", "seed": 3,
    })
    assert response.status_code == 200
    body = response.json()

    assert body["construction"] == "aaccaacc"
    assert body["masses"][0]["type"] == "SHOULDER"
    assert body["masses"][0]["code"] == "f"
    assert body["grammar_errors"] == []
    assert body["construction_errors"] == []

    keys = [(s["higher"], s["lower"]) for s in body["springs"]]
    assert keys == sorted(keys)
    assert all(s["higher"] > s["lower"] for s in body["springs"])


def test_develop_is_reproducible(client):
    payload = {"grammar": GRAMMAR, "initialisation": "A(2){B}", "seed": 8}
    first = client.post("/api/develop", json=payload).json()
    second = client.post("/api/develop", json=payload).json()
    assert first == second


def test_develop_rejects_negative_seed(client):
    response = client.post("/api/develop", json={"grammar": GRAMMAR, "seed": -1})
    assert response.status_code == 422


def test_export_endpoints(client):
    payload = {"grammar": GRAMMAR, "initialisation": "A(2){B}", "seed": 3}

    masses = client.post("/api/export/masses", json=payload)
    connections = client.post("/api/export/connections", json=payload)

    assert masses.status_code == 200
    assert masses.text.startswith("# type,x,y,z")
    assert "f,0.0,0.0,0" in masses.text
    assert connections.text.startswith("# higher index,lower index,connection type")
