import os

TEST_DB_FILE = "test_eduvillage.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before eduvillage.core.config is imported
os.environ.setdefault("DATABASE_URL", TEST_DB_URL)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from eduvillage.core.deps import get_db, request_session  # noqa: E402
from eduvillage.core.security import hash_password  # noqa: E402
from eduvillage.db.base import Base  # noqa: E402
from eduvillage.db.session import make_engine  # noqa: E402
from eduvillage.main import app  # noqa: E402
from eduvillage.models.completion import CourseCompletion  # noqa: E402
from eduvillage.models.course import Course  # noqa: E402
from eduvillage.models.enrollment import Enrollment  # noqa: E402
from eduvillage.models.lecture import Lecture  # noqa: E402
from eduvillage.models.user import User  # noqa: E402

PASSWORD = "password123"

# hashed once; bcrypt is deliberately slow
PASSWORD_HASH = hash_password(PASSWORD)

SEED_USERS = {
    "admin": ("admin@example.com", "Admin", "admin", True),
    "instructor1": ("instructor1@example.com", "Instructor One", "instructor", True),
    "instructor2": ("instructor2@example.com", "Instructor Two", "instructor", True),
    "student1": ("student1@example.com", "Student One", "student", True),
    "student2": ("student2@example.com", "Student Two", "student", True),
    "inactive": ("inactive@example.com", "Inactive Student", "student", False),
}

engine = make_engine(TEST_DB_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    yield from request_session(TestingSessionLocal)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seed_data():
    """Seed a clean set of users for each test; returns their ids by key."""
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        db.query(Lecture).delete()
        db.query(CourseCompletion).delete()
        db.query(Enrollment).delete()
        db.query(Course).delete()
        db.query(User).delete()
        db.commit()

        users = {}
        for key, (email, name, role, active) in SEED_USERS.items():
            users[key] = User(
                email=email,
                name=name,
                role=role,
                is_active=active,
                hashed_password=PASSWORD_HASH,
            )
        db.add_all(users.values())
        db.commit()

        yield {key: user.id for key, user in users.items()}
    finally:
        db.close()


@pytest.fixture()
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client():
    """Test client that uses the test DB session via dependency override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def lenient_client():
    """Like `client`, but unhandled errors come back as 500 responses instead of raising."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def tokens(client):
    """Bearer tokens for every active seeded user, keyed like SEED_USERS."""
    result = {}
    for key, (email, _, _, active) in SEED_USERS.items():
        if not active:
            continue
        r = client.post("/auth/login", json={"email": email, "password": PASSWORD})
        assert r.status_code == 200, r.text
        result[key] = r.json()["token"]
    return result


@pytest.fixture()
def make_course(client, tokens):
    """Create a course through the API, optionally publishing it."""

    def _make(owner: str = "instructor1", publish: bool = False, **fields) -> dict:
        payload = {
            "title": "Intro to Design",
            "description": "Colour, type and layout basics",
            "category": "design",
            "level": "beginner",
        }
        payload.update(fields)
        headers = {"Authorization": f"Bearer {tokens[owner]}"}

        r = client.post("/courses", json=payload, headers=headers)
        assert r.status_code == 201, r.text
        course = r.json()["data"]

        if publish:
            r = client.post(f"/courses/{course['id']}/publish", headers=headers)
            assert r.status_code == 200, r.text
            course = r.json()["data"]
        return course

    return _make
