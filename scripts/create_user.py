"""Create a user record and print an x-auth-token for trying the private routes locally."""

import argparse

from dev_profiles.auth import create_access_token
from dev_profiles.database import SessionLocal, init_db
from dev_profiles.models import User


def create_user(name: str, email: str, avatar: str = "") -> User:
    init_db()
    db = SessionLocal()
    try:
        user = User(name=name, email=email, avatar=avatar or None)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("name")
    parser.add_argument("email")
    parser.add_argument("--avatar", default="")
    args = parser.parse_args()

    user = create_user(args.name, args.email, args.avatar)
    print(f"User id: {user.id}")
    print(f"x-auth-token: {create_access_token(user.id)}")
