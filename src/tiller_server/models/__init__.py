from tiller_server.models.evaluations import Evaluation
from tiller_server.models.jobs import Job
from tiller_server.models.scheduler import SCHEDULER_CONFIG_ID, SchedulerConfiguration

__all__ = [
    "Evaluation",
    "Job",
    "SCHEDULER_CONFIG_ID",
    "SchedulerConfiguration",
]
