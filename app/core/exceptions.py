"""
Domain exceptions.

Services raise these; the handler registered in app.main turns them into
{"detail": message} responses with the carried status code.
"""


class ResearchConnectError(Exception):
    """Base error with a human readable message."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BusinessRuleError(ResearchConnectError):
    """A rule of the marketplace was violated (CGPA gate, duplicates, deadlines)."""
    status_code = 400


class AuthenticationError(ResearchConnectError):
    status_code = 401


class PermissionDeniedError(ResearchConnectError):
    """Wrong role, or not the owner of the position."""
    status_code = 403


class NotFoundError(ResearchConnectError):
    status_code = 404


class ServiceUnavailableError(ResearchConnectError):
    """The database could not complete the request."""
    status_code = 503
