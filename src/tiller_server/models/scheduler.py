from sqlmodel import Field, SQLModel

SCHEDULER_CONFIG_ID = 1


class SchedulerConfiguration(SQLModel, table=True):
    """Cluster-wide scheduler settings, stored as a single row."""

    __tablename__ = "scheduler_configuration"

    id: int = Field(default=SCHEDULER_CONFIG_ID, primary_key=True)
    scheduler_algorithm: str = Field(default="binpack")
    pause_eval_broker: bool = Field(default=False)
    reject_job_registration: bool = Field(default=False)
    memory_oversubscription_enabled: bool = Field(default=False)
    modify_index: int = Field(default=0)
