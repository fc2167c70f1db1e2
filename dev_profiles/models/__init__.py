from dev_profiles.models.user import User
from dev_profiles.models.profile import Profile
from dev_profiles.models.post import Post

__all__ = [
    "User",
    "Profile",
    "Post",
]
