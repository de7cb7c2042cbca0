"""
Storage boundary for users, jobs and applications.

Every create goes through the creation validator, gets its defaults from the
entity constructor, and is committed in its own transaction. Constraint
violations surface as UniquenessError / ReferentialIntegrityError; nothing is
retried here.
"""
import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.application import Application
from ..models.job import Job
from ..models.user import User
from ..utils.error_handlers import (
    DatabaseError,
    NotFoundError,
    ReferentialIntegrityError,
    UniquenessError,
    get_error_message,
)
from ..utils.validation import (
    validate_application,
    validate_application_status,
    validate_job,
    validate_job_status,
    validate_user,
)

logger = logging.getLogger(__name__)


# -------------------- Lookups --------------------

def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def get_job(db: Session, job_id: int) -> Job | None:
    return db.get(Job, job_id)


def get_application(db: Session, application_id: int) -> Application | None:
    return db.get(Application, application_id)


# -------------------- Commit helpers --------------------

def _missing_reference(db: Session, refs: list[tuple[str, type, Any]]) -> tuple[str, Any] | None:
    for field, model, value in refs:
        if db.get(model, value) is None:
            return field, value
    return None


def _commit(db: Session, obj, *, unique: dict[str, Any] | None = None, refs: list | None = None):
    """
    Flush `obj` and commit. On a constraint failure roll back and work out
    which constraint it was, since driver messages differ between engines.
    """
    db.add(obj)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        msg = str(getattr(e, "orig", e)).lower()
        if unique and ("unique" in msg or "duplicate" in msg):
            field, value = next(iter(unique.items()))
            logger.warning(f"Unique constraint on {field} rejected insert")
            raise UniquenessError(field, value) from e
        missing = _missing_reference(db, refs or [])
        if missing is not None:
            logger.warning(f"Foreign key {missing[0]}={missing[1]} rejected insert")
            raise ReferentialIntegrityError(*missing) from e
        logger.error(f"Integrity error not mapped to a known constraint: {e}")
        raise DatabaseError(get_error_message("database_error"), details={"error": msg}) from e
    db.refresh(obj)
    return obj


# -------------------- Creates --------------------

def create_user(db: Session, data: Any) -> User:
    record = validate_user(data)

    username = record["username"]
    if get_user_by_username(db, username) is not None:
        logger.warning(f"Username already taken: {username!r}")
        raise UniquenessError("username", username)

    user = User(**record)
    _commit(db, user, unique={"username": username})
    logger.info(f"Created user id={user.id} role={user.role}")
    return user


def create_job(db: Session, data: Any, employer_id: int) -> Job:
    """
    Create a job posted by `employer_id`.

    The employer id comes from the caller (the authenticated account), never
    from the client record.
    """
    record = validate_job(data)

    if get_user(db, employer_id) is None:
        logger.warning(f"Job rejected: employer {employer_id} does not exist")
        raise ReferentialIntegrityError("employerId", employer_id)

    job = Job(**record, employer_id=employer_id)
    _commit(db, job, refs=[("employerId", User, employer_id)])
    logger.info(f"Created job id={job.id} employer_id={employer_id}")
    return job


def create_application(db: Session, data: Any) -> Application:
    record = validate_application(data)

    refs = [
        ("jobId", Job, record["job_id"]),
        ("workerId", User, record["worker_id"]),
    ]
    missing = _missing_reference(db, refs)
    if missing is not None:
        logger.warning(f"Application rejected: {missing[0]}={missing[1]} does not exist")
        raise ReferentialIntegrityError(*missing)

    application = Application(**record)
    _commit(db, application, refs=refs)
    logger.info(
        f"Created application id={application.id} job_id={application.job_id} "
        f"worker_id={application.worker_id}"
    )
    return application


# -------------------- Status transitions --------------------

def update_job_status(db: Session, job_id: int, status: Any) -> Job:
    status = validate_job_status(status)
    job = get_job(db, job_id)
    if job is None:
        raise NotFoundError(get_error_message("job_not_found"), details={"jobId": job_id})

    previous = job.status
    job.status = status
    _commit(db, job)
    logger.info(f"Job {job_id} status {previous} -> {status}")
    return job


def update_application_status(db: Session, application_id: int, status: Any) -> Application:
    status = validate_application_status(status)
    application = get_application(db, application_id)
    if application is None:
        raise NotFoundError(
            get_error_message("application_not_found"),
            details={"applicationId": application_id},
        )

    previous = application.status
    application.status = status
    _commit(db, application)
    logger.info(f"Application {application_id} status {previous} -> {status}")
    return application
