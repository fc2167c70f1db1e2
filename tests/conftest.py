"""
Shared fixtures.

Every test gets its own in-memory SQLite database. The app's ``get_db``
dependency is overridden to use it, and private routes see the ``user``
fixture as the caller unless a test swaps the identity.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dev_profiles.app import create_app
from dev_profiles.auth import get_current_user_id
from dev_profiles.database import Base, get_db
from dev_profiles.models import User


@pytest.fixture()
def engine():
    import dev_profiles.models  # noqa: F401 ensure models are registered

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def app(session_factory):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


def _add_user(db, name: str, email: str) -> User:
    user = User(name=name, email=email, avatar=f"//www.gravatar.com/avatar/{name.split()[0].lower()}")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def user(db):
    return _add_user(db, "Jane Dev", "jane@example.com")


@pytest.fixture()
def other_user(db):
    return _add_user(db, "Omar Coder", "omar@example.com")


@pytest.fixture()
def act_as(app):
    """Make private routes treat the given user id as the caller."""

    def _act_as(user_id: str):
        app.dependency_overrides[get_current_user_id] = lambda: user_id

    return _act_as


@pytest.fixture()
def client(app, user, act_as):
    act_as(user.id)
    return TestClient(app)


@pytest.fixture()
def anon_client(app):
    return TestClient(app)


@pytest.fixture()
def profile_payload():
    return {
        "company": "Acme",
        "website": "https://jane.dev",
        "location": "Berlin",
        "bio": "Backend developer",
        "status": "Developer",
        "githubusername": "janedev",
        "skills": "node, react , express",
        "twitter": "https://twitter.com/janedev",
        "linkedin": "https://linkedin.com/in/janedev",
    }


@pytest.fixture()
def created_profile(client, profile_payload):
    resp = client.post("/api/profile", json=profile_payload)
    assert resp.status_code == 200
    return resp.json()
