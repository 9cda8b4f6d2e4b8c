from eduvillage.core.config import REQUEST_TIMEOUT_SECONDS
from eduvillage.db.session import SessionLocal, set_deadline


def request_session(factory):
    """
    One session per request. Commits are refused once the request timeout
    has passed, and uncommitted work is dropped if the handler fails.
    """
    db = factory()
    set_deadline(db, REQUEST_TIMEOUT_SECONDS)
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db():
    yield from request_session(SessionLocal)
