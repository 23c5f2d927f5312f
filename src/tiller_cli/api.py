"""Thin client for the control plane HTTP API."""

import logging
from typing import Any, List, Optional, Sequence

import httpx
from pydantic import BaseModel

from tiller_cli.errors import NotFoundError, StoreError, TransportError

logger = logging.getLogger(__name__)


class SchedulerConfig(BaseModel):
    pause_eval_broker: bool
    scheduler_algorithm: str = "binpack"
    reject_job_registration: bool = False
    memory_oversubscription_enabled: bool = False
    modify_index: int = 0


class EvaluationRecord(BaseModel):
    id: str
    namespace: str = "default"
    job_id: str
    type: str = ""
    priority: int = 0
    triggered_by: str = ""
    status: str
    status_description: Optional[str] = None
    created_at: int = 0


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    detail = payload.get("detail") if isinstance(payload, dict) else None
    return str(detail) if detail else response.text or response.reason_phrase


class SchedulerAPI:
    """Operations against one control plane over an httpx client.

    Used as a context manager; the httpx client is closed on exit only when
    ``owns_client`` is set.
    """

    def __init__(self, http: httpx.Client, owns_client: bool = False) -> None:
        self.http = http
        self.owns_client = owns_client

    def __enter__(self) -> "SchedulerAPI":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self.owns_client:
            self.http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug(f"{method} {path}")
        try:
            response = self.http.request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise TransportError(f"failed to reach {self.http.base_url}: {e}") from e

        if response.is_success:
            return response

        detail = _error_detail(response)
        logger.debug(f"{method} {path} failed with HTTP {response.status_code}: {detail}")
        if response.status_code in (401, 403):
            raise TransportError(f"authentication failed: {detail}")
        if response.status_code == 404:
            raise NotFoundError(detail)
        raise StoreError(detail, status_code=response.status_code)

    def get_scheduler_config(self) -> SchedulerConfig:
        response = self._request("GET", "/v1/operator/scheduler/configuration")
        return SchedulerConfig.model_validate(response.json())

    def set_scheduler_config(self, **updates: Any) -> SchedulerConfig:
        response = self._request("PUT", "/v1/operator/scheduler/configuration", json=updates)
        return SchedulerConfig.model_validate(response.json())

    def list_evaluations(self, filter_expr: str = "") -> List[EvaluationRecord]:
        params = {"filter": filter_expr} if filter_expr else None
        response = self._request("GET", "/v1/evaluations", params=params)
        return [EvaluationRecord.model_validate(item) for item in response.json().get("data", [])]

    def delete_evaluations(self, eval_ids: Sequence[str]) -> int:
        """Delete evaluations in a single request; returns the number removed."""
        response = self._request("DELETE", "/v1/evaluations", json={"eval_ids": list(eval_ids)})
        return int(response.json()["deleted"])
