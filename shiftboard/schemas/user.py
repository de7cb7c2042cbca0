from typing import ClassVar, Literal

from pydantic import Field, StrictInt, field_validator

from .base import CreateSchema, ReadSchema


class UserCreate(CreateSchema):
    username: str
    password: str
    role: Literal["worker", "employer"]
    full_name: str
    email: str
    phone: str | None = None
    company_name: str | None = None
    company_description: str | None = None
    company_logo: str | None = None
    bio: str | None = None
    skills: list[str] = Field(default_factory=list)
    hourly_rate: StrictInt | None = None
    years_experience: StrictInt | None = None

    always_dump: ClassVar[tuple[str, ...]] = ("skills",)

    @field_validator("skills", mode="before")
    @classmethod
    def _null_skills(cls, v):
        return [] if v is None else v


class UserRead(ReadSchema):
    # No password: read models never echo the credential.
    id: int
    username: str
    role: str
    full_name: str
    email: str
    phone: str | None = None
    company_name: str | None = None
    company_description: str | None = None
    company_logo: str | None = None
    bio: str | None = None
    skills: list[str] = Field(default_factory=list)
    hourly_rate: int | None = None
    years_experience: int | None = None
    verified: bool = False
