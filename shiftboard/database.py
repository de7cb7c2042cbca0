import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker

from . import config

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    # Allow the short `.env` forms and upgrade them to the driver form.
    if url.startswith("mysql://"):
        return url.replace("mysql://", "mysql+pymysql://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def _set_sqlite_pragmas(dbapi_connection, connection_record):  # noqa: ANN001
    # SQLite ignores FOREIGN KEY clauses unless asked.
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON;")
    finally:
        cursor.close()


def make_engine(url: str, echo: bool = False):
    url = normalize_database_url((url or "").strip())
    kwargs = {"pool_pre_ping": True, "echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}

    eng = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        event.listen(eng, "connect", _set_sqlite_pragmas)
    return eng


engine = make_engine(config.DATABASE_URL, echo=config.SQL_ECHO)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    # Import models so they register with SQLAlchemy metadata before create_all.
    from .models import application, job, user  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def check_db_connection(bind=None) -> dict:
    """Run `SELECT 1` against the store and report the outcome."""
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "connected"}
    except Exception as e:
        logger.warning("Database connection check failed: %s", e)
        return {"status": "error", "message": str(e)}
