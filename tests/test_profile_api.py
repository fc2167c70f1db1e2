from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from dev_profiles.database import get_db
from dev_profiles.models import Post, Profile, User
from dev_profiles.routes.api_profile import get_profile_service
from dev_profiles.services.profile_service import ProfileService


def test_create_profile_splits_and_trims_skills(client, user, profile_payload):
    resp = client.post("/api/profile", json=profile_payload)
    assert resp.status_code == 200
    data = resp.json()
    assert data["skills"] == ["node", "react", "express"]
    assert data["status"] == "Developer"
    assert data["user"]["id"] == user.id
    assert data["social"] == {
        "twitter": "https://twitter.com/janedev",
        "linkedin": "https://linkedin.com/in/janedev",
    }
    assert data["experiences"] == []
    assert data["education"] == []


def test_create_profile_is_persisted(client, db, user, created_profile):
    stored = db.query(Profile).filter(Profile.user_id == user.id).one()
    assert stored.id == created_profile["id"]
    assert stored.skills == ["node", "react", "express"]


def test_repost_updates_instead_of_duplicating(client, db, user, created_profile):
    resp = client.post(
        "/api/profile",
        json={"status": "Senior Developer", "skills": "python,fastapi", "youtube": "https://yt/jane"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == created_profile["id"]
    assert data["status"] == "Senior Developer"
    assert data["skills"] == ["python", "fastapi"]
    # Omitted fields keep their earlier values
    assert data["company"] == "Acme"
    assert data["bio"] == "Backend developer"
    assert data["social"]["twitter"] == "https://twitter.com/janedev"
    assert data["social"]["youtube"] == "https://yt/jane"
    assert db.query(Profile).filter(Profile.user_id == user.id).count() == 1


def test_missing_status_and_skills_reports_both_errors(client):
    resp = client.post("/api/profile", json={"company": "Acme"})
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert {e["param"] for e in errors} == {"status", "skills"}
    assert {e["msg"] for e in errors} == {"Status is required", "Skills is required"}
    assert all(e["location"] == "body" for e in errors)


def test_blank_status_is_rejected(client):
    resp = client.post("/api/profile", json={"status": "  ", "skills": "go"})
    assert resp.status_code == 400
    assert [e["param"] for e in resp.json()["errors"]] == ["status"]


def test_comma_only_skills_are_rejected(client):
    resp = client.post("/api/profile", json={"status": "Dev", "skills": " , ,"})
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert [e["param"] for e in errors] == ["skills"]
    assert errors[0]["msg"] == "Skills is required"


def test_comma_only_skills_do_not_wipe_existing_skills(client, created_profile):
    resp = client.post("/api/profile", json={"status": "Dev", "skills": ","})
    assert resp.status_code == 400
    assert client.get("/api/profile/me").json()["skills"] == ["node", "react", "express"]


def test_wrongly_typed_body_is_a_400(client):
    resp = client.post("/api/profile", json={"status": "Dev", "skills": ["not", "a", "string"]})
    assert resp.status_code == 400
    assert resp.json()["errors"]


def test_get_own_profile_includes_user_name_and_avatar(client, user, created_profile):
    resp = client.get("/api/profile/me")
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == created_profile["id"]
    assert data["user"] == {"id": user.id, "name": "Jane Dev", "avatar": user.avatar}


def test_get_own_profile_without_profile(client):
    resp = client.get("/api/profile/me")
    assert resp.status_code == 400
    assert resp.json() == {"msg": "There is no profile for this user"}


def test_list_profiles_is_public(client, anon_client, other_user, act_as, created_profile):
    act_as(other_user.id)
    client.post("/api/profile", json={"status": "Student", "skills": "c"})

    resp = anon_client.get("/api/profile")
    assert resp.status_code == 200
    names = sorted(p["user"]["name"] for p in resp.json())
    assert names == ["Jane Dev", "Omar Coder"]


def test_list_profiles_empty(anon_client):
    resp = anon_client.get("/api/profile")
    assert resp.status_code == 200
    assert resp.json() == []


def test_get_profile_by_user(anon_client, user, created_profile):
    resp = anon_client.get(f"/api/profile/user/{user.id}")
    assert resp.status_code == 200
    assert resp.json()["id"] == created_profile["id"]


def test_get_profile_by_unknown_user(anon_client, other_user):
    resp = anon_client.get(f"/api/profile/user/{other_user.id}")
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Profile not found"}


def test_get_profile_by_malformed_user_id(anon_client):
    resp = anon_client.get("/api/profile/user/not-an-id")
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Profile not found"}


def test_delete_removes_posts_profile_and_user(client, db, user, other_user, created_profile):
    user_id = user.id
    other_user_id = other_user.id
    db.add_all([
        Post(user_id=user_id, text="first"),
        Post(user_id=user_id, text="second"),
        Post(user_id=other_user_id, text="not mine"),
    ])
    db.commit()

    resp = client.delete("/api/profile")
    assert resp.status_code == 200
    assert resp.json() == {"msg": "User removed"}

    db.expire_all()
    assert db.query(Post).filter(Post.user_id == user_id).count() == 0
    assert db.query(Profile).filter(Profile.user_id == user_id).first() is None
    assert db.query(User).filter(User.id == user_id).first() is None
    assert db.query(Post).filter(Post.user_id == other_user_id).count() == 1

    assert client.get(f"/api/profile/user/{user_id}").status_code == 400


def test_private_routes_require_token(anon_client):
    for method, path in [
        ("get", "/api/profile/me"),
        ("post", "/api/profile"),
        ("delete", "/api/profile"),
        ("put", "/api/profile/experience"),
        ("delete", "/api/profile/education/abc"),
    ]:
        resp = getattr(anon_client, method)(path)
        assert resp.status_code == 401, path
        assert resp.json() == {"msg": "No token, authorization denied"}


def test_unhandled_error_returns_plain_server_error(app):
    class BrokenService:
        def list_profiles(self):
            raise RuntimeError("database is gone")

    app.dependency_overrides[get_profile_service] = lambda: BrokenService()
    client = TestClient(app, raise_server_exceptions=False)

    resp = client.get("/api/profile")
    assert resp.status_code == 500
    assert resp.text == "Server Error"


def test_health(anon_client):
    assert anon_client.get("/health").json() == {"status": "ok"}


class _UserDeleteFails:
    """Session wrapper whose User delete raises after posts and profile are already deleted."""

    def __init__(self, session):
        self._session = session

    def __getattr__(self, name):
        return getattr(self._session, name)

    def query(self, model):
        query = self._session.query(model)
        if model is User:
            return _FailingDelete()
        return query


class _FailingDelete:
    def filter(self, *criteria):
        return self

    def delete(self):
        raise RuntimeError("users table is locked")


def test_failed_delete_cascade_rolls_back(app, db, user, created_profile):
    user_id = user.id
    db.add_all([Post(user_id=user_id, text="first"), Post(user_id=user_id, text="second")])
    db.commit()

    def failing_service(session: Session = Depends(get_db)):
        return ProfileService(_UserDeleteFails(session))

    app.dependency_overrides[get_profile_service] = failing_service
    client = TestClient(app, raise_server_exceptions=False)

    resp = client.delete("/api/profile")
    assert resp.status_code == 500
    assert resp.text == "Server Error"

    db.expire_all()
    assert db.query(Post).filter(Post.user_id == user_id).count() == 2
    assert db.query(Profile).filter(Profile.user_id == user_id).first() is not None
    assert db.query(User).filter(User.id == user_id).first() is not None


def test_root_routes_accept_trailing_slash(client, profile_payload):
    resp = client.post("/api/profile/", json=profile_payload, follow_redirects=False)
    assert resp.status_code == 200
    assert resp.json()["skills"] == ["node", "react", "express"]

    listed = client.get("/api/profile/", follow_redirects=False)
    assert listed.status_code == 200
    assert len(listed.json()) == 1

    deleted = client.delete("/api/profile/", follow_redirects=False)
    assert deleted.status_code == 200
    assert deleted.json() == {"msg": "User removed"}
