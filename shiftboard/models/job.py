from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from ..database import Base
from .types import StringList

JOB_STATUS_OPEN = "open"
JOB_STATUS_FILLED = "filled"
JOB_STATUS_CLOSED = "closed"
JOB_STATUSES = (JOB_STATUS_OPEN, JOB_STATUS_FILLED, JOB_STATUS_CLOSED)


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    requirements = Column(StringList, nullable=True, default=lambda: [])
    # TODO: start_date <= end_date is not checked; enforce once product decides how to reject it.
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    shift_start_time = Column(Text, nullable=False)  # e.g. "08:00"
    shift_end_time = Column(Text, nullable=False)
    shift_hours = Column(Integer, nullable=False)
    rate = Column(Integer, nullable=False)
    employer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(Text, nullable=False, default=JOB_STATUS_OPEN, server_default=JOB_STATUS_OPEN)

    employer = relationship("User", back_populates="jobs")
    applications = relationship("Application", back_populates="job")

    def __init__(self, **kwargs):
        if kwargs.get("requirements") is None:
            kwargs["requirements"] = []
        if kwargs.get("status") is None:
            kwargs["status"] = JOB_STATUS_OPEN
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<Job id={self.id} title={self.title!r} status={self.status!r}>"
