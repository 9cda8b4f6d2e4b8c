import time

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from eduvillage.core.config import DATABASE_URL
from eduvillage.core.errors import RequestTimeoutError

DEADLINE_KEY = "deadline"


def make_engine(url: str) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    engine = create_engine(url, connect_args=connect_args)

    if engine.dialect.name == "sqlite":
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def set_deadline(db: Session, seconds: float) -> None:
    db.info[DEADLINE_KEY] = time.monotonic() + seconds


@event.listens_for(Session, "before_commit")
def _refuse_commit_after_deadline(db: Session):
    # the client has already been answered 504; its writes must not land
    deadline = db.info.get(DEADLINE_KEY)
    if deadline is not None and time.monotonic() > deadline:
        raise RequestTimeoutError()


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
