from datetime import datetime

from pydantic import StrictInt

from .base import CreateSchema, ReadSchema


class ApplicationCreate(CreateSchema):
    job_id: StrictInt
    worker_id: StrictInt
    note: str | None = None


class ApplicationRead(ReadSchema):
    id: int
    job_id: int
    worker_id: int
    status: str
    note: str | None = None
    created_at: datetime
