"""Error taxonomy shared by the services and the API layer."""


class TrackerError(Exception):
    """Base error; carries the HTTP status and the message shown to the user."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Missing, malformed or out-of-range input."""

    status_code = 400


class ConflictError(TrackerError):
    """A unique field (account name or email) is already taken."""

    status_code = 400


class AuthError(TrackerError):
    """Missing/invalid/expired token or bad credentials."""

    status_code = 401


class NotFoundError(TrackerError):
    """Resource absent or owned by someone else."""

    status_code = 404


class ServerError(TrackerError):
    status_code = 500

    def __init__(self, message: str = "Server error. Please try again."):
        super().__init__(message)
