from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base

APPLICATION_STATUS_PENDING = "pending"
APPLICATION_STATUS_ACCEPTED = "accepted"
APPLICATION_STATUS_REJECTED = "rejected"
APPLICATION_STATUSES = (
    APPLICATION_STATUS_PENDING,
    APPLICATION_STATUS_ACCEPTED,
    APPLICATION_STATUS_REJECTED,
)


def utcnow() -> datetime:
    # Column is TIMESTAMP without time zone; store naive UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Application(Base):
    __tablename__ = "applications"

    # TODO: no unique (job_id, worker_id) constraint until product decides whether repeat applications are allowed.
    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False)
    worker_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(
        Text,
        nullable=False,
        default=APPLICATION_STATUS_PENDING,
        server_default=APPLICATION_STATUS_PENDING,
    )
    note = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, server_default=func.now())

    job = relationship("Job", back_populates="applications")
    worker = relationship("User", back_populates="applications")

    def __init__(self, **kwargs):
        if kwargs.get("status") is None:
            kwargs["status"] = APPLICATION_STATUS_PENDING
        if kwargs.get("created_at") is None:
            kwargs["created_at"] = utcnow()
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<Application id={self.id} job_id={self.job_id} worker_id={self.worker_id} status={self.status!r}>"
