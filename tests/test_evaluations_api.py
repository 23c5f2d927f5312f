from fastapi.testclient import TestClient

from conftest import MEMORY_DATABASE_URL, list_eval_ids, register_job, set_broker_paused
from tiller_server.app import create_app
from tiller_server.settings import Settings


def _delete(client: TestClient, eval_ids: list[str]):
    return client.request("DELETE", "/v1/evaluations", json={"eval_ids": eval_ids})


def test_scheduler_config_defaults(client: TestClient) -> None:
    response = client.get("/v1/operator/scheduler/configuration")

    assert response.status_code == 200
    payload = response.json()
    assert payload["pause_eval_broker"] is False
    assert payload["scheduler_algorithm"] == "binpack"
    assert payload["modify_index"] == 0


def test_scheduler_config_partial_update_bumps_modify_index(client: TestClient) -> None:
    response = client.put("/v1/operator/scheduler/configuration", json={"pause_eval_broker": True})
    assert response.json()["modify_index"] == 1

    response = client.put("/v1/operator/scheduler/configuration", json={"scheduler_algorithm": "spread"})
    payload = response.json()
    assert payload["pause_eval_broker"] is True
    assert payload["scheduler_algorithm"] == "spread"
    assert payload["modify_index"] == 2


def test_register_job_creates_pending_evaluation(client: TestClient) -> None:
    eval_id = register_job(client, "web", priority=70)

    response = client.get(f"/v1/evaluations/{eval_id}")

    assert response.status_code == 200
    payload = response.json()
    assert payload["job_id"] == "web"
    assert payload["status"] == "pending"
    assert payload["triggered_by"] == "job-register"
    assert payload["priority"] == 70


def test_register_job_twice_bumps_job_modify_index(client: TestClient) -> None:
    first = client.post("/v1/jobs", json={"name": "web"}).json()
    second = client.post("/v1/jobs", json={"name": "web"}).json()

    assert first["eval_id"] != second["eval_id"]
    assert second["job_modify_index"] == first["job_modify_index"] + 1


def test_register_job_rejected_when_configured(client: TestClient) -> None:
    client.put("/v1/operator/scheduler/configuration", json={"reject_job_registration": True})

    response = client.post("/v1/jobs", json={"name": "web"})

    assert response.status_code == 409
    assert list_eval_ids(client) == []


def test_get_unknown_evaluation(client: TestClient) -> None:
    response = client.get("/v1/evaluations/does-not-exist")

    assert response.status_code == 404
    assert response.json()["detail"] == "eval not found"


def test_delete_requires_paused_broker(client: TestClient) -> None:
    eval_id = register_job(client, "web")

    response = _delete(client, [eval_id])

    assert response.status_code == 409
    assert "eval broker must be paused" in response.json()["detail"]
    assert list_eval_ids(client) == [eval_id]


def test_delete_empty_batch(client: TestClient) -> None:
    set_broker_paused(client, True)

    response = _delete(client, [])

    assert response.status_code == 200
    assert response.json() == {"deleted": 0}


def test_delete_unknown_ids(client: TestClient) -> None:
    set_broker_paused(client, True)
    eval_id = register_job(client, "web")

    response = _delete(client, ["missing-1", "missing-2"])

    assert response.status_code == 404
    assert response.json()["detail"] == "eval not found"
    assert list_eval_ids(client) == [eval_id]


def test_delete_counts_only_existing_ids(client: TestClient) -> None:
    set_broker_paused(client, True)
    first = register_job(client, "web")
    second = register_job(client, "web")

    response = _delete(client, [first, "missing", first])

    assert response.json() == {"deleted": 1}
    assert list_eval_ids(client) == [second]


def test_auth_token_required_when_configured() -> None:
    app = create_app(Settings(database_url=MEMORY_DATABASE_URL, token="secret"))
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200

        response = client.get("/v1/evaluations")
        assert response.status_code == 401

        response = client.get("/v1/evaluations", headers={"Authorization": "Bearer secret"})
        assert response.status_code == 200
