"""Pydantic API schemas for request/response models.
Database models are in the models/ module.
"""
from .evaluations import EvaluationDeleteRequest, EvaluationDeleteResponse, EvaluationResponse
from .jobs import JobRegisterRequest, JobRegisterResponse
from .scheduler import SchedulerConfigResponse, SchedulerConfigUpdateRequest

__all__ = [
    "EvaluationDeleteRequest",
    "EvaluationDeleteResponse",
    "EvaluationResponse",
    "JobRegisterRequest",
    "JobRegisterResponse",
    "SchedulerConfigResponse",
    "SchedulerConfigUpdateRequest",
]
