import os
import sys
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure tests use an in-memory SQLite DB and a throwaway upload dir
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_ROOT", tempfile.mkdtemp(prefix="famhealth-uploads-"))
os.environ.setdefault("GEMINI_API_KEY", "")

# Ensure the project root is on sys.path so `import famhealth` works when running
# pytest from the repository root.
ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from famhealth.app import app  # noqa: E402
from famhealth.auth.deps import get_current_user  # noqa: E402
from famhealth.db.session import Base, get_db  # noqa: E402
from famhealth.services import storage  # noqa: E402

TEST_USER_ID = "user-1"

# In-memory SQLite shared across connections
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Code paths that open SessionLocal directly (startup seeding) use the test engine too
import famhealth.db.session as session_mod  # noqa: E402
session_mod.engine = engine
session_mod.SessionLocal = TestingSessionLocal
import famhealth.models as models_mod  # noqa: E402
models_mod.engine = engine


@pytest.fixture(autouse=True)
def create_schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def _override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def _fake_user():
    return SimpleNamespace(id=TEST_USER_ID, email="u@example.com", name=None)


app.dependency_overrides[get_db] = _override_get_db
app.dependency_overrides[get_current_user] = _fake_user


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    # ensure limiter state fresh each test
    app.state.limiter.reset()
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def real_auth():
    """Run requests through the bearer-token dependency instead of the fake user."""
    app.dependency_overrides.pop(get_current_user, None)
    yield
    app.dependency_overrides[get_current_user] = _fake_user


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(storage, "DEFAULT_UPLOAD_DIR", tmp_path)
    return tmp_path


@pytest.fixture
def onboarded(client):
    """Complete onboarding for the fake user with a small family history."""
    r = client.post("/api/onboarding", json={
        "name": "Dana",
        "age": 45,
        "sex": "female",
        "family_members": [
            {"relation": "Mother", "conditions": ["Diabetes"]},
            {"relation": "Father", "conditions": ["Heart Disease"]},
        ],
        "current_conditions": ["Asthma"],
        "medications": "Metformin, Ibuprofen",
        "allergies": "Penicillin",
        "surgeries": "",
    })
    assert r.status_code == 200
    return r.json()
