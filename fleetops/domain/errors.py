"""
Domain error taxonomy.

All of these are expected outcomes of normal operation.  The API layer maps
each class to an HTTP status via ``status_code``; store failures are not
wrapped and propagate as infrastructure faults.
"""


class FleetError(Exception):
    """Base class for expected, caller-facing domain outcomes."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(FleetError):
    """Request carried a value the domain does not accept (e.g. unknown role)."""


class DuplicateError(FleetError):
    """Unique key already taken (email)."""


class NotFoundError(FleetError):
    status_code = 404


class AuthenticationFailure(FleetError):
    """Bad credentials.  Never says whether the email or the password was wrong."""

    status_code = 401

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(detail)


class InvalidToken(FleetError):
    """Token is malformed, expired or signed with another key."""

    status_code = 401

    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(detail)


class AuthorizationFailure(FleetError):
    """Authenticated, but the role is not allowed to run the operation."""

    status_code = 403
