"""
Domain errors raised by the service layer.

Routers let these propagate; ``main`` installs one handler that renders
``{"detail": message}`` with the class's status code. Missing and
not-owned entities share ``NotFoundOrForbidden`` so responses never reveal
whether another user's row exists.
"""


class DomainError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    status_code = 400


class NotFoundOrForbidden(DomainError):
    status_code = 404


class ConflictError(DomainError):
    status_code = 409


class InternalError(DomainError):
    status_code = 500
