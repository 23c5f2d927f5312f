import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from conftest import list_eval_ids, register_job, set_broker_paused
from tiller_cli.evals import deletion
from tiller_cli.main import app

runner = CliRunner()

MISSING_EVAL_ID = "fa3a8c37-eac3-00c7-3410-5ba3f7318fd8"


class TestEvalDeleteFailures:
    def test_validation_error_makes_no_requests(self, cli_client, requests_log) -> None:
        result = runner.invoke(app, ["eval", "delete"])

        assert result.exit_code == 1
        assert "Error validating command args and flags" in result.output
        assert "evaluation ID or filter flag required" in result.output
        assert cli_client == []
        assert requests_log == []

    def test_filter_and_id_together_are_rejected(self, cli_client, requests_log) -> None:
        result = runner.invoke(app, ["eval", "delete", '--filter=Status == "pending"', MISSING_EVAL_ID])

        assert result.exit_code == 1
        assert "evaluation ID or filter flag required" in result.output
        assert requests_log == []

    def test_multiple_ids_are_rejected(self, cli_client, requests_log) -> None:
        result = runner.invoke(app, ["eval", "delete", MISSING_EVAL_ID, "fa3a8c37-eac3-00c7-3410-5ba3f7318fd9"])

        assert result.exit_code == 1
        assert "expected 1 argument, got 2" in result.output
        assert requests_log == []

    def test_broker_must_be_paused(self, client: TestClient, cli_client, requests_log) -> None:
        eval_id = register_job(client, "web")
        requests_log.clear()

        result = runner.invoke(app, ["eval", "delete", eval_id])

        assert result.exit_code == 1
        assert "Eval broker is not paused" in result.output
        assert "tiller operator scheduler set-config --pause-eval-broker" in result.output
        assert requests_log == [("GET", "/v1/operator/scheduler/configuration")]
        assert list_eval_ids(client) == [eval_id]

    def test_unknown_eval_id(self, client: TestClient, cli_client) -> None:
        eval_id = register_job(client, "web")
        set_broker_paused(client, True)

        result = runner.invoke(app, ["eval", "delete", MISSING_EVAL_ID])

        assert result.exit_code == 1
        assert "eval not found" in result.output
        assert f"Error deleting evaluation {MISSING_EVAL_ID}" in result.output
        assert list_eval_ids(client) == [eval_id]

    def test_malformed_filter_is_rejected_by_the_server(self, client: TestClient, cli_client, requests_log) -> None:
        register_job(client, "web")
        set_broker_paused(client, True)
        requests_log.clear()

        result = runner.invoke(app, ["eval", "delete", "--filter", "JobID = web"])

        assert result.exit_code == 1
        assert "failed to parse filter" in result.output
        assert all(method != "DELETE" for method, _ in requests_log)
        assert len(list_eval_ids(client)) == 1

    def test_broker_resumed_after_the_gate_check(
        self, client: TestClient, cli_client, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        set_broker_paused(client, True)
        eval_id = register_job(client, "web")
        resolve = deletion.resolve_eval_ids

        def resolve_then_resume(api, selector):
            eval_ids = resolve(api, selector)
            set_broker_paused(client, False)
            return eval_ids

        monkeypatch.setattr(deletion, "resolve_eval_ids", resolve_then_resume)

        result = runner.invoke(app, ["eval", "delete", eval_id])

        assert result.exit_code == 1
        assert f"Error deleting evaluation {eval_id}" in result.output
        assert "eval broker must be paused" in result.output
        assert list_eval_ids(client) == [eval_id]


class TestEvalDeleteSuccess:
    def test_delete_by_id_then_by_filter(self, client: TestClient, cli_client) -> None:
        set_broker_paused(client, True)
        eval_ids = [register_job(client, "eval-delete") for _ in range(3)]
        assert len(list_eval_ids(client)) == 3

        result = runner.invoke(app, ["eval", "delete", eval_ids[0]])
        assert result.exit_code == 0, result.output
        assert "Successfully deleted 1 evaluation" in result.output
        assert list_eval_ids(client) == eval_ids[1:]

        expr = 'JobID == "eval-delete" and Status == "pending" '
        result = runner.invoke(app, ["eval", "delete", f"--filter={expr}"])
        assert result.exit_code == 0, result.output
        assert "Successfully deleted 2 evaluations" in result.output
        assert list_eval_ids(client) == []

    def test_rerunning_a_filtered_delete_reports_zero(self, client: TestClient, cli_client, requests_log) -> None:
        set_broker_paused(client, True)
        register_job(client, "batch")

        first = runner.invoke(app, ["eval", "delete", "--filter", 'JobID == "batch"'])
        requests_log.clear()
        second = runner.invoke(app, ["eval", "delete", "--filter", 'JobID == "batch"'])

        assert first.exit_code == 0
        assert "Successfully deleted 1 evaluation" in first.output
        assert second.exit_code == 0
        assert "Successfully deleted 0 evaluations" in second.output
        assert all(method != "DELETE" for method, _ in requests_log)

    def test_filter_only_deletes_matching_evaluations(self, client: TestClient, cli_client) -> None:
        set_broker_paused(client, True)
        keep = register_job(client, "api")
        register_job(client, "worker")
        register_job(client, "worker")

        result = runner.invoke(app, ["eval", "delete", "--filter", 'JobID == "worker"'])

        assert result.exit_code == 0
        assert "Successfully deleted 2 evaluations" in result.output
        assert list_eval_ids(client) == [keep]

    def test_dry_run_deletes_nothing(self, client: TestClient, cli_client, requests_log) -> None:
        set_broker_paused(client, True)
        eval_ids = [register_job(client, "web") for _ in range(2)]
        requests_log.clear()

        result = runner.invoke(app, ["eval", "delete", "--dry-run", "--filter", 'JobID == "web"'])

        assert result.exit_code == 0
        assert "Would delete 2 evaluations" in result.output
        for eval_id in eval_ids:
            assert eval_id in result.output
        assert all(method != "DELETE" for method, _ in requests_log)
        assert list_eval_ids(client) == eval_ids

    def test_address_and_token_are_passed_to_the_client(self, client: TestClient, cli_client) -> None:
        set_broker_paused(client, True)
        eval_id = register_job(client, "web")

        result = runner.invoke(
            app, ["eval", "delete", "--address", "http://10.0.0.1:4747", "--token", "secret", eval_id]
        )

        assert result.exit_code == 0
        assert cli_client == [("http://10.0.0.1:4747", "secret")]

    def test_dry_run_prints_ids_literally(self, client: TestClient, cli_client) -> None:
        set_broker_paused(client, True)

        result = runner.invoke(app, ["eval", "delete", "--dry-run", "[bold]abc"])

        assert result.exit_code == 0, result.output
        assert "[bold]abc" in result.output
        assert "Would delete 1 evaluation" in result.output
