from sqlalchemy.orm import Session

from ..models.application import Application
from ..models.job import Job
from ..models.user import User
from ..schemas.application import ApplicationRead
from ..schemas.job import JobRead
from ..schemas.user import UserRead
from ..utils.error_handlers import NotFoundError, ReferentialIntegrityError, get_error_message


def employer_of(db: Session, job: Job) -> User:
    """The user who posted `job`. Raises if the reference is dangling."""
    employer = db.get(User, job.employer_id)
    if employer is None:
        raise ReferentialIntegrityError("employerId", job.employer_id)
    return employer


def job_of(db: Session, application: Application) -> Job:
    job = db.get(Job, application.job_id)
    if job is None:
        raise ReferentialIntegrityError("jobId", application.job_id)
    return job


def worker_of(db: Session, application: Application) -> User:
    worker = db.get(User, application.worker_id)
    if worker is None:
        raise ReferentialIntegrityError("workerId", application.worker_id)
    return worker


def job_with_employer(db: Session, job_id: int) -> dict:
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError(get_error_message("job_not_found"), details={"jobId": job_id})

    return {
        "job": JobRead.model_validate(job).model_dump(by_alias=True),
        "employer": UserRead.model_validate(employer_of(db, job)).model_dump(by_alias=True),
    }


def application_with_related(db: Session, application_id: int) -> dict:
    application = db.get(Application, application_id)
    if application is None:
        raise NotFoundError(
            get_error_message("application_not_found"),
            details={"applicationId": application_id},
        )

    return {
        "application": ApplicationRead.model_validate(application).model_dump(by_alias=True),
        "job": JobRead.model_validate(job_of(db, application)).model_dump(by_alias=True),
        "worker": UserRead.model_validate(worker_of(db, application)).model_dump(by_alias=True),
    }
