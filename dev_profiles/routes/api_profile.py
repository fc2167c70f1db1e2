from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dev_profiles.auth import get_current_user_id
from dev_profiles.database import get_db
from dev_profiles.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    MessageResponse,
    ProfileFields,
    ProfileResponse,
)
from dev_profiles.services.github_client import GithubClient, get_github_client
from dev_profiles.services.profile_service import ProfileService

router = APIRouter()


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)


@router.get("/me", response_model=ProfileResponse)
def get_own_profile(
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    return service.get_own_profile(user_id)


@router.post("", response_model=ProfileResponse)
@router.post("/", response_model=ProfileResponse, include_in_schema=False)
def upsert_profile(
    data: ProfileFields,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Create or update the caller's profile."""
    return service.upsert_profile(user_id, data)


@router.get("", response_model=list[ProfileResponse])
@router.get("/", response_model=list[ProfileResponse], include_in_schema=False)
def list_profiles(service: ProfileService = Depends(get_profile_service)):
    return service.list_profiles()


@router.get("/user/{user_id}", response_model=ProfileResponse)
def get_profile_by_user(user_id: str, service: ProfileService = Depends(get_profile_service)):
    return service.get_profile_by_user(user_id)


@router.delete("", response_model=MessageResponse)
@router.delete("/", response_model=MessageResponse, include_in_schema=False)
def delete_own_profile(
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Delete the caller's posts, profile and user record."""
    return service.delete_own_profile(user_id)


@router.put("/experience", response_model=ProfileResponse)
def add_experience(
    entry: ExperienceCreate,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    return service.add_experience(user_id, entry)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
def remove_experience(
    exp_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    return service.remove_experience(user_id, exp_id)


@router.put("/education", response_model=ProfileResponse)
def add_education(
    entry: EducationCreate,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    return service.add_education(user_id, entry)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
def remove_education(
    edu_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    return service.remove_education(user_id, edu_id)


@router.get("/github/{username}")
async def get_github_repos(username: str, github: GithubClient = Depends(get_github_client)):
    """Proxy the user's five newest GitHub repositories."""
    return await github.fetch_repos(username)
