import re
from datetime import date, datetime, time, timezone
from typing import ClassVar

from pydantic import Field, StrictInt, field_validator
from pydantic_core import PydanticCustomError

from .base import CreateSchema, ReadSchema

# Extended ISO 8601 only. Compact ("20240101") and week ("2024-W01-1") dates
# are rejected; digit-only strings would otherwise parse as unix timestamps.
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]")


def _bad_date(value: str) -> PydanticCustomError:
    return PydanticCustomError(
        "datetime_parsing",
        "Input should be an ISO 8601 date (YYYY-MM-DD) or date-time, got {value!r}",
        {"value": value},
    )


class JobCreate(CreateSchema):
    title: str
    description: str
    location: str
    requirements: list[str] = Field(default_factory=list)
    start_date: datetime
    end_date: datetime
    shift_start_time: str
    shift_end_time: str
    shift_hours: StrictInt
    rate: StrictInt

    always_dump: ClassVar[tuple[str, ...]] = ("requirements",)

    @field_validator("requirements", mode="before")
    @classmethod
    def _null_requirements(cls, v):
        return [] if v is None else v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _date_to_datetime(cls, v):
        """
        Accepts `date`/`datetime` objects, unix timestamps (numbers), and
        strings of the form YYYY-MM-DD or YYYY-MM-DD[T ]HH:MM[:SS][offset].
        A bare calendar date means midnight of that day.
        """
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time.min)
        if isinstance(v, str):
            v = v.strip()
            if _ISO_DATE.match(v):
                try:
                    return datetime.combine(date.fromisoformat(v), time.min)
                except ValueError:
                    raise _bad_date(v) from None
            if not _ISO_DATETIME.match(v):
                raise _bad_date(v)
        return v

    @field_validator("start_date", "end_date")
    @classmethod
    def _naive_utc(cls, v: datetime) -> datetime:
        # Columns are TIMESTAMP without time zone; store naive UTC like created_at.
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class JobRead(ReadSchema):
    id: int
    title: str
    description: str
    location: str
    requirements: list[str] = Field(default_factory=list)
    start_date: datetime
    end_date: datetime
    shift_start_time: str
    shift_end_time: str
    shift_hours: int
    rate: int
    employer_id: int
    status: str
