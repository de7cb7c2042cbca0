"""
Creation validation: turn an untyped client record into a normalized record
ready for insertion, or reject it with every failing field listed.
"""
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..models.application import APPLICATION_STATUSES
from ..models.job import JOB_STATUSES
from ..schemas.application import ApplicationCreate
from ..schemas.job import JobCreate
from ..schemas.base import CreateSchema
from ..schemas.user import UserCreate
from .error_handlers import ValidationError

CREATE_SCHEMAS: dict[str, type[CreateSchema]] = {
    "user": UserCreate,
    "job": JobCreate,
    "application": ApplicationCreate,
}

ROOT_FIELD = "__root__"


def _reason(error_type: str) -> str:
    if error_type == "missing":
        return "missing"
    if error_type in {"literal_error", "enum"}:
        return "invalid_value"
    if error_type.startswith(("datetime", "date")):
        return "coercion_failed"
    return "invalid_type"


def _client_names(schema: type[CreateSchema]) -> dict[str, str]:
    # Map both spellings of a key to the camelCase name clients send.
    names = {}
    for name, field in schema.model_fields.items():
        alias = field.alias or name
        names[name] = alias
        names[alias] = alias
    return names


def collect_errors(schema: type[CreateSchema], exc: PydanticValidationError) -> list[dict]:
    """One entry per failing field, in the order pydantic reported them."""
    names = _client_names(schema)
    errors = []
    seen = set()
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = names.get(str(loc[0]), str(loc[0])) if loc else ROOT_FIELD
        if field in seen:
            continue
        seen.add(field)
        errors.append({
            "field": field,
            "reason": _reason(err.get("type", "")),
            "message": err.get("msg", "Invalid value"),
        })
    return errors


def validate_create(kind: str, data: Any) -> dict:
    """
    Validate `data` as a new `kind` ("user", "job" or "application").

    Returns the normalized record keyed by column name. Raises
    ValidationError listing every failing field.
    """
    schema = CREATE_SCHEMAS.get(kind)
    if schema is None:
        raise ValueError(f"Unknown entity kind: {kind!r}")

    if not isinstance(data, Mapping):
        raise ValidationError([{
            "field": ROOT_FIELD,
            "reason": "invalid_type",
            "message": f"Expected an object, got {type(data).__name__}",
        }])

    try:
        model = schema.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(collect_errors(schema, e)) from e
    return model.normalized()


def validate_user(data: Any) -> dict:
    return validate_create("user", data)


def validate_job(data: Any) -> dict:
    return validate_create("job", data)


def validate_application(data: Any) -> dict:
    return validate_create("application", data)


def _validate_status(status: Any, allowed: tuple[str, ...]) -> str:
    if not isinstance(status, str):
        raise ValidationError([{
            "field": "status",
            "reason": "invalid_type",
            "message": "status must be a string",
        }])
    status = status.strip().lower()
    if status not in allowed:
        raise ValidationError([{
            "field": "status",
            "reason": "invalid_value",
            "message": f"Invalid status. Must be one of: {', '.join(allowed)}",
        }])
    return status


def validate_job_status(status: Any) -> str:
    """Validate a job status supplied by business logic."""
    return _validate_status(status, JOB_STATUSES)


def validate_application_status(status: Any) -> str:
    """Validate an application status supplied by business logic."""
    return _validate_status(status, APPLICATION_STATUSES)
