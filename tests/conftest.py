from typing import Any, Generator, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from tiller_cli.api import SchedulerAPI
from tiller_server.app import create_app
from tiller_server.settings import Settings

MEMORY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

CLI_COMMAND_MODULES = (
    "tiller_cli.evals.delete",
    "tiller_cli.evals.list",
    "tiller_cli.operator.scheduler",
)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    app = create_app(Settings(database_url=MEMORY_DATABASE_URL, token=None))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def requests_log(client: TestClient) -> List[Tuple[str, str]]:
    """Every request sent through the test client, as (method, path)."""
    log: List[Tuple[str, str]] = []

    def record(request: Any) -> None:
        log.append((request.method, request.url.path))

    client.event_hooks = {"request": [record], "response": []}
    return log


@pytest.fixture
def cli_client(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> List[Tuple[Optional[str], Optional[str]]]:
    """Route CLI commands to the in-process server; returns the get_client calls made."""
    calls: List[Tuple[Optional[str], Optional[str]]] = []

    def fake_get_client(address: Optional[str] = None, token: Optional[str] = None) -> SchedulerAPI:
        calls.append((address, token))
        return SchedulerAPI(client)

    for module in CLI_COMMAND_MODULES:
        monkeypatch.setattr(f"{module}.get_client", fake_get_client)
    return calls


def set_broker_paused(client: TestClient, paused: bool) -> None:
    response = client.put("/v1/operator/scheduler/configuration", json={"pause_eval_broker": paused})
    assert response.status_code == 200
    assert response.json()["pause_eval_broker"] is paused


def register_job(client: TestClient, name: str, **fields: Any) -> str:
    response = client.post("/v1/jobs", json={"name": name, **fields})
    assert response.status_code == 200
    return response.json()["eval_id"]


def list_eval_ids(client: TestClient, filter_expr: Optional[str] = None) -> List[str]:
    params = {"filter": filter_expr} if filter_expr else None
    response = client.get("/v1/evaluations", params=params)
    assert response.status_code == 200
    return [item["id"] for item in response.json()["data"]]

