from datetime import datetime

import pytest

from conftest import job_payload, user_payload
from shiftboard.models.application import Application
from shiftboard.models.job import Job
from shiftboard.models.user import User
from shiftboard.services import storage
from shiftboard.services.storage import (
    create_application,
    create_job,
    create_user,
    get_application,
    get_job,
    get_user,
    get_user_by_username,
    update_application_status,
    update_job_status,
)
from shiftboard.utils.error_handlers import (
    NotFoundError,
    ReferentialIntegrityError,
    UniquenessError,
    ValidationError,
)
from shiftboard.utils.validation import validate_job, validate_user


def test_create_user_defaults(db_session):
    user = create_user(db_session, user_payload())
    assert user.id is not None
    assert user.skills == []
    assert user.verified is False
    assert get_user_by_username(db_session, "alice").id == user.id


def test_server_assigned_user_fields_ignored(db_session):
    user = create_user(db_session, user_payload(id=99, verified=True))
    assert user.id != 99
    assert user.verified is False


def test_duplicate_username_rejected(db_session):
    create_user(db_session, user_payload())
    with pytest.raises(UniquenessError) as exc:
        create_user(db_session, user_payload(email="other@x.com"))
    assert exc.value.field == "username"
    assert exc.value.value == "alice"
    assert db_session.query(User).count() == 1


def test_username_collision_at_commit_is_translated(db_session, monkeypatch):
    # Simulates losing a race: the pre-check sees no row, the store rejects the insert.
    create_user(db_session, user_payload())
    monkeypatch.setattr(storage, "get_user_by_username", lambda db, username: None)
    with pytest.raises(UniquenessError):
        create_user(db_session, user_payload())
    assert db_session.query(User).count() == 1


def test_invalid_user_is_not_stored(db_session):
    with pytest.raises(ValidationError):
        create_user(db_session, {"username": "bob"})
    assert db_session.query(User).count() == 0


def test_create_job(db_session, employer):
    job = create_job(db_session, job_payload(status="closed", employerId=12345), employer_id=employer.id)
    assert job.status == "open"
    assert job.employer_id == employer.id
    assert job.requirements == []
    assert job.start_date.date().isoformat() == "2024-01-01"


def test_create_job_unknown_employer(db_session):
    with pytest.raises(ReferentialIntegrityError) as exc:
        create_job(db_session, job_payload(), employer_id=404)
    assert exc.value.field == "employerId"
    assert db_session.query(Job).count() == 0


def test_foreign_key_failure_at_commit_is_translated(db_session, monkeypatch):
    monkeypatch.setattr(storage, "get_user", lambda db, user_id: object())
    with pytest.raises(ReferentialIntegrityError) as exc:
        create_job(db_session, job_payload(), employer_id=404)
    assert exc.value.field == "employerId"
    assert exc.value.value == 404


def test_create_application_defaults(db_session, worker, job):
    application = create_application(db_session, {
        "jobId": job.id,
        "workerId": worker.id,
        "status": "accepted",
        "createdAt": "2000-01-01T00:00:00",
    })
    assert application.status == "pending"
    assert application.created_at.year != 2000
    assert application.note is None


def test_created_at_non_decreasing(db_session, worker, job):
    first = create_application(db_session, {"jobId": job.id, "workerId": worker.id})
    second = create_application(db_session, {"jobId": job.id, "workerId": worker.id, "note": "again"})
    # Repeat applications for the same pair are allowed.
    assert first.id != second.id
    assert second.created_at >= first.created_at


def test_create_application_unknown_references(db_session, worker, job):
    with pytest.raises(ReferentialIntegrityError) as exc:
        create_application(db_session, {"jobId": 404, "workerId": worker.id})
    assert exc.value.field == "jobId"

    with pytest.raises(ReferentialIntegrityError) as exc:
        create_application(db_session, {"jobId": job.id, "workerId": 404})
    assert exc.value.field == "workerId"
    assert db_session.query(Application).count() == 0


def test_round_trip_user(db_session):
    record = validate_user(user_payload(phone="555", skills=["a", "b"], hourlyRate=30))
    user = create_user(db_session, user_payload(phone="555", skills=["a", "b"], hourlyRate=30))
    db_session.expire_all()
    stored = get_user(db_session, user.id)
    for key, value in record.items():
        assert getattr(stored, key) == value


def test_round_trip_job(db_session, employer):
    data = job_payload(requirements=["boots", "lift 50lb"])
    record = validate_job(data)
    job = create_job(db_session, data, employer_id=employer.id)
    db_session.expire_all()
    stored = get_job(db_session, job.id)
    for key, value in record.items():
        assert getattr(stored, key) == value


def test_round_trip_job_with_offset_and_timestamp(db_session, employer):
    data = job_payload(startDate="2024-01-01T23:30:00-05:00", endDate=1704067200)
    record = validate_job(data)
    job = create_job(db_session, data, employer_id=employer.id)
    db_session.expire_all()
    stored = get_job(db_session, job.id)
    assert stored.start_date == record["start_date"] == datetime(2024, 1, 2, 4, 30)
    assert stored.end_date == record["end_date"] == datetime(2024, 1, 1)


def test_update_job_status(db_session, job):
    updated = update_job_status(db_session, job.id, "filled")
    assert updated.status == "filled"
    assert get_job(db_session, job.id).status == "filled"

    with pytest.raises(ValidationError):
        update_job_status(db_session, job.id, "archived")
    with pytest.raises(NotFoundError):
        update_job_status(db_session, 404, "closed")


def test_update_application_status_keeps_created_at(db_session, worker, job):
    application = create_application(db_session, {"jobId": job.id, "workerId": worker.id})
    created_at = application.created_at

    updated = update_application_status(db_session, application.id, "accepted")
    assert updated.status == "accepted"
    assert get_application(db_session, application.id).created_at == created_at

    with pytest.raises(NotFoundError):
        update_application_status(db_session, 404, "rejected")
