from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from dev_profiles.exceptions import ProfileNotFound
from dev_profiles.models import Post, Profile, User
from dev_profiles.models.ids import new_object_id
from dev_profiles.schemas.profile import (
    SOCIAL_FIELDS,
    EducationCreate,
    ExperienceCreate,
    ProfileFields,
)
from dev_profiles.utils.text_processing import split_comma_list
from dev_profiles.utils.validation import require_fields

logger = logging.getLogger(__name__)

NO_PROFILE_MSG = "There is no profile for this user"
PROFILE_NOT_FOUND_MSG = "Profile not found"

_OBJECT_ID_RE = re.compile(r"^[0-9a-f]{32}$")

PROFILE_REQUIRED = [
    ("status", "Status is required"),
    ("skills", "Skills is required"),
]
EXPERIENCE_REQUIRED = [
    ("title", "Title is required"),
    ("company", "Company is required"),
    ("from", "From date is required"),
]
EDUCATION_REQUIRED = [
    ("school", "School is required"),
    ("degree", "Degree is required"),
    ("fieldOfStudy", "Field of study is required"),
    ("from", "From date is required"),
]

_SCALAR_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")


@dataclass
class ProfilePatch:
    """Sparse set of profile changes: only fields that were actually provided."""

    fields: dict = field(default_factory=dict)
    social: dict = field(default_factory=dict)

    @classmethod
    def from_fields(cls, data: ProfileFields) -> "ProfilePatch":
        patch = cls()
        for name in _SCALAR_FIELDS:
            value = getattr(data, name)
            if value:
                patch.fields[name] = value
        if data.skills:
            patch.fields["skills"] = split_comma_list(data.skills)
        for name in SOCIAL_FIELDS:
            value = getattr(data, name)
            if value:
                patch.social[name] = value
        return patch

    def apply(self, profile: Profile) -> None:
        for name, value in self.fields.items():
            setattr(profile, name, value)
        if self.social:
            # New dict so the JSON column is flagged dirty
            profile.social = {**(profile.social or {}), **self.social}

    def create(self, user_id: str) -> Profile:
        profile = Profile(user_id=user_id, social={}, experiences=[], education=[])
        self.apply(profile)
        return profile


def is_object_id(value: str) -> bool:
    return bool(_OBJECT_ID_RE.match(value or ""))


class ProfileService:
    """Profile reads and writes for one request-scoped session."""

    def __init__(self, db: Session):
        self.db = db

    def _find(self, user_id: str) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()

    def _require(self, user_id: str) -> Profile:
        profile = self._find(user_id)
        if not profile:
            logger.info(f"No profile for user {user_id}")
            raise ProfileNotFound(NO_PROFILE_MSG)
        return profile

    def _save(self, profile: Profile) -> Profile:
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def get_own_profile(self, user_id: str) -> Profile:
        return self._require(user_id)

    def upsert_profile(self, user_id: str, data: ProfileFields) -> Profile:
        """Create the caller's profile, or overwrite the fields provided in ``data``."""
        fields = data.model_dump()
        # Comma-only input like " , ," has no skills in it
        if fields["skills"] and not split_comma_list(fields["skills"]):
            fields["skills"] = ""
        require_fields(fields, PROFILE_REQUIRED)
        patch = ProfilePatch.from_fields(data)

        profile = self._find(user_id)
        if profile:
            patch.apply(profile)
            logger.info(f"Updated profile for user {user_id} ({', '.join(sorted(patch.fields))})")
            return self._save(profile)

        profile = patch.create(user_id)
        self.db.add(profile)
        logger.info(f"Created profile for user {user_id}")
        return self._save(profile)

    def list_profiles(self) -> list[Profile]:
        return self.db.query(Profile).order_by(Profile.date.desc()).all()

    def get_profile_by_user(self, user_id: str) -> Profile:
        # Malformed ids are reported exactly like unknown ones
        if not is_object_id(user_id):
            logger.info(f"Malformed user id {user_id!r}")
            raise ProfileNotFound(PROFILE_NOT_FOUND_MSG)
        profile = self._find(user_id)
        if not profile:
            raise ProfileNotFound(PROFILE_NOT_FOUND_MSG)
        return profile

    def delete_own_profile(self, user_id: str) -> dict:
        """Remove the user's posts, then the profile, then the user, in one transaction."""
        try:
            deleted_posts = self.db.query(Post).filter(Post.user_id == user_id).delete()
            deleted_profiles = self.db.query(Profile).filter(Profile.user_id == user_id).delete()
            deleted_users = self.db.query(User).filter(User.id == user_id).delete()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(
            f"Removed user {user_id}: {deleted_posts} posts, "
            f"{deleted_profiles} profiles, {deleted_users} users"
        )
        return {"msg": "User removed"}

    def add_experience(self, user_id: str, entry: ExperienceCreate) -> Profile:
        require_fields(entry.model_dump(by_alias=True), EXPERIENCE_REQUIRED)
        profile = self._require(user_id)
        profile.experiences = [_new_entry(entry), *(profile.experiences or [])]
        return self._save(profile)

    def remove_experience(self, user_id: str, exp_id: str) -> Profile:
        profile = self._require(user_id)
        profile.experiences = _without_entry(profile.experiences, exp_id)
        return self._save(profile)

    def add_education(self, user_id: str, entry: EducationCreate) -> Profile:
        require_fields(entry.model_dump(by_alias=True), EDUCATION_REQUIRED)
        profile = self._require(user_id)
        profile.education = [_new_entry(entry), *(profile.education or [])]
        return self._save(profile)

    def remove_education(self, user_id: str, edu_id: str) -> Profile:
        profile = self._require(user_id)
        profile.education = _without_entry(profile.education, edu_id)
        return self._save(profile)


def _new_entry(entry: ExperienceCreate | EducationCreate) -> dict:
    return {"id": new_object_id(), **entry.model_dump(by_alias=True, mode="json")}


def _without_entry(entries: Optional[list[dict]], entry_id: str) -> list[dict]:
    """Drop the entry with ``entry_id``; an unknown id leaves the list as it was."""
    entries = list(entries or [])
    remaining = [item for item in entries if item.get("id") != entry_id]
    if len(remaining) == len(entries):
        logger.info(f"Entry {entry_id} not found; nothing removed")
    return remaining
