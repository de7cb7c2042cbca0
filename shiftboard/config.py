import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Override=True so edits to .env take effect on reload.
#
# Tests point DATABASE_URL at a temporary SQLite file; set DISABLE_DOTENV=1 so a
# developer's .env cannot override it.
if os.getenv("DISABLE_DOTENV") != "1":
    load_dotenv(override=True)

_TRUTHY = {"1", "true", "True", "yes", "YES"}

_raw_database_url = (os.getenv("DATABASE_URL") or "").strip()
# Local SQLite file by default so the model can be exercised without a server.
_default_sqlite_path = (Path(__file__).resolve().parent.parent / "dev.db").as_posix()
DATABASE_URL = _raw_database_url or f"sqlite:///{_default_sqlite_path}"

SQL_ECHO = (os.getenv("SQL_ECHO", "0") or "0").strip() in _TRUTHY

LOG_LEVEL = (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
