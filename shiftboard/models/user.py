from sqlalchemy import Boolean, Column, Integer, Text, false
from sqlalchemy.orm import relationship

from ..database import Base
from .types import StringList

ROLE_WORKER = "worker"
ROLE_EMPLOYER = "employer"
USER_ROLES = (ROLE_WORKER, ROLE_EMPLOYER)


class User(Base):
    """
    One account, worker or employer.

    Company fields are meaningful for employers and `bio` for workers, but the
    table accepts any combination; role-based rules live upstream.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(Text, unique=True, nullable=False)
    password = Column(Text, nullable=False)  # opaque credential, hashed upstream
    role = Column(Text, nullable=False)  # worker / employer
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    company_name = Column(Text, nullable=True)
    company_description = Column(Text, nullable=True)
    company_logo = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)
    skills = Column(StringList, nullable=True, default=lambda: [])
    hourly_rate = Column(Integer, nullable=True)
    years_experience = Column(Integer, nullable=True)
    verified = Column(Boolean, nullable=True, default=False, server_default=false())

    # Read-side only. TODO: pick cascade or restrict for deleting a user with jobs or applications.
    jobs = relationship("Job", back_populates="employer")
    applications = relationship("Application", back_populates="worker")

    def __init__(self, **kwargs):
        if kwargs.get("skills") is None:
            kwargs["skills"] = []
        if kwargs.get("verified") is None:
            kwargs["verified"] = False
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role!r}>"
