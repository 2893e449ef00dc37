from sqlmodel import Session, SQLModel, create_engine

from backend.config import settings

_is_sqlite = settings.database_url.startswith("sqlite")

engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)

if _is_sqlite and ":memory:" not in settings.database_url:
    with engine.connect() as _conn:
        _conn.exec_driver_sql("PRAGMA journal_mode=WAL")


def create_db_and_tables() -> None:
    SQLModel.metadata.create_all(engine)


def get_session():
    """Yield one database session per request; each request is one state transition."""
    with Session(engine) as session:
        yield session
