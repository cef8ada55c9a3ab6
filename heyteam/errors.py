"""
Error taxonomy for the HeyTeam client

Services raise these; screens catch HeyTeamError at their boundary and turn
it into a transient notice. Nothing is rethrown past a screen.
"""

from typing import Optional


class HeyTeamError(Exception):
    """Base class for every error the client surfaces to the user"""

    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NetworkError(HeyTeamError):
    """Raised when a request could not complete"""

    default_message = "Network request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        error_type: str = "Request Error",
        diagnosis: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.diagnosis = diagnosis
        self.status_code = status_code


class NotFoundError(HeyTeamError):
    """Raised when a referenced job or availability record does not exist"""

    default_message = "Not found"


class ValidationError(HeyTeamError):
    """Raised when client-side checks reject input before submission"""

    default_message = "Please fill in all required fields"


class UpdateError(HeyTeamError):
    """Raised when the backend rejects a mutation"""

    default_message = "Failed to update"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiError(HeyTeamError):
    """Raised for a non-2xx response other than 404; services translate it further"""

    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
