from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.core import config


def _connect_args(database_url: str) -> dict:
    # SQLite connections are shared across the FastAPI threadpool.
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(config.DATABASE_URL, connect_args=_connect_args(config.DATABASE_URL))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_progress_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _has_unique_key(inspector, table_name: str, columns: list[str]) -> bool:
    wanted = set(columns)
    for constraint in inspector.get_unique_constraints(table_name):
        if set(constraint["column_names"]) == wanted:
            return True
    for index in inspector.get_indexes(table_name):
        if index.get("unique") and set(index["column_names"]) == wanted:
            return True
    return False


def ensure_progress_schema(bind=None) -> None:
    """Backfill the keys that tables created by older releases may lack.

    Concurrent upserts rely on the (user_id, platform) unique key.
    """
    global _progress_schema_checked

    if _progress_schema_checked:
        return

    bind = bind or engine

    with _schema_lock:
        if _progress_schema_checked:
            return

        inspector = inspect(bind)

        if 'progress' not in inspector.get_table_names():
            _progress_schema_checked = True
            return

        has_unique_key = _has_unique_key(inspector, 'progress', ['user_id', 'platform'])

        with bind.begin() as connection:
            if not has_unique_key:
                connection.execute(
                    text('CREATE UNIQUE INDEX IF NOT EXISTS uq_progress_user_platform_idx ON progress(user_id, platform)')
                )
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_progress_user_updated ON progress(user_id, last_updated)')
            )

        _progress_schema_checked = True
