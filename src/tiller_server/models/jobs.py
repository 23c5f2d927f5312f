import time

from sqlmodel import Field, SQLModel


class Job(SQLModel, table=True):
    __tablename__ = "jobs"

    id: str = Field(primary_key=True)
    namespace: str = Field(default="default")
    type: str = Field(default="service")
    priority: int = Field(default=50)
    version: int = Field(default=0)
    modify_index: int = Field(default=0)
    submitted_at: int = Field(default_factory=lambda: int(time.time()))
