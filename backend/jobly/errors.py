"""Error classes raised by the builders, services and auth policies.

Each carries the HTTP status the API maps it to, so the exception handlers in
``jobly.main`` never need to know which layer raised it.
"""


class JoblyError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(JoblyError):
    """Malformed or contradictory caller input."""

    status_code = 400
    default_message = "Bad Request"


class DuplicateError(JoblyError):
    """A record with the same unique key already exists."""

    status_code = 400
    default_message = "Duplicate record"


class NotFoundError(JoblyError):
    status_code = 404
    default_message = "Not Found"


class UnauthorizedError(JoblyError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(JoblyError):
    status_code = 403
    default_message = "Forbidden"
