import os
import sys
from pathlib import Path

import pytest
from sqlalchemy.orm import sessionmaker


# Ensure `import shiftboard...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def engine(tmp_path: Path):
    """
    Engine on a throwaway SQLite file, with the shared database module rebound
    to it so anything reading `database.SessionLocal` sees the test DB.
    """
    # Must be set before shiftboard.config is first imported.
    os.environ["DISABLE_DOTENV"] = "1"
    os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{tmp_path / 'test.sqlite3'}"

    from shiftboard import database as db

    test_engine = db.make_engine(os.environ["DATABASE_URL"])
    db.engine = test_engine
    db.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    db.init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def db_session(engine):
    from shiftboard.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def user_payload(**overrides) -> dict:
    data = {
        "username": "alice",
        "password": "x",
        "role": "worker",
        "fullName": "Alice A",
        "email": "a@x.com",
    }
    data.update(overrides)
    return data


def job_payload(**overrides) -> dict:
    data = {
        "title": "Warehouse shift",
        "description": "Unload trucks and stock shelves",
        "location": "Austin",
        "startDate": "2024-01-01",
        "endDate": "2024-01-02",
        "shiftStartTime": "08:00",
        "shiftEndTime": "16:00",
        "shiftHours": 8,
        "rate": 20,
    }
    data.update(overrides)
    return data


@pytest.fixture()
def employer(db_session):
    from shiftboard.services.storage import create_user

    return create_user(
        db_session,
        user_payload(username="acme", role="employer", fullName="Acme Owner", companyName="Acme"),
    )


@pytest.fixture()
def worker(db_session):
    from shiftboard.services.storage import create_user

    return create_user(db_session, user_payload(skills=["forklift", "inventory"]))


@pytest.fixture()
def job(db_session, employer):
    from shiftboard.services.storage import create_job

    return create_job(db_session, job_payload(), employer_id=employer.id)
