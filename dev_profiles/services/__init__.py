from dev_profiles.services.github_client import GithubClient, get_github_client
from dev_profiles.services.profile_service import ProfilePatch, ProfileService

__all__ = [
    "GithubClient",
    "get_github_client",
    "ProfilePatch",
    "ProfileService",
]
