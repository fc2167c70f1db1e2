"""Exceptions raised by the profile service and mapped to HTTP responses in app.py."""


class ProfileServiceError(Exception):
    """Base exception for the profile service."""

    status_code = 500

    def __init__(self, msg: str):
        self.msg = msg
        super().__init__(msg)


class RequestValidationFailed(ProfileServiceError):
    """One or more required body fields are missing or empty."""

    status_code = 400

    def __init__(self, errors: list[dict]):
        self.errors = errors
        super().__init__("; ".join(error["msg"] for error in errors))


class ProfileNotFound(ProfileServiceError):
    status_code = 400


class GithubLookupError(ProfileServiceError):
    """The GitHub repository listing could not be fetched."""

    status_code = 404

    def __init__(self, msg: str = "No Github profile found", cause: str = ""):
        self.cause = cause
        super().__init__(msg)


class AuthenticationError(ProfileServiceError):
    status_code = 401
