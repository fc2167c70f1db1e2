from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

SOCIAL_FIELDS = ("youtube", "twitter", "linkedin", "facebook", "instagram")


class ProfileFields(BaseModel):
    """Body of POST /api/profile. Required fields are checked by the service."""

    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: Optional[str] = None
    youtube: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None


class _EntryBase(BaseModel):
    from_: Optional[date] = Field(None, alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}

    @field_validator("from_", "to", mode="before")
    @classmethod
    def _blank_date_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ExperienceCreate(_EntryBase):
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None


class EducationCreate(_EntryBase):
    school: Optional[str] = None
    degree: Optional[str] = None
    field_of_study: Optional[str] = Field(None, alias="fieldOfStudy")


class ExperienceResponse(ExperienceCreate):
    id: str


class EducationResponse(EducationCreate):
    id: str


class UserSummary(BaseModel):
    id: str
    name: str
    avatar: Optional[str] = None

    model_config = {"from_attributes": True}


class ProfileResponse(BaseModel):
    id: str
    user: Optional[UserSummary] = None
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    status: str
    skills: list[str] = []
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: dict[str, str] = {}
    experiences: list[ExperienceResponse] = []
    education: list[EducationResponse] = []
    date: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    msg: str
