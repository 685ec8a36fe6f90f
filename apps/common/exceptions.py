"""
Domain error kinds shared by every app.

Service layers raise subclasses of these instead of HTTP exceptions. The API
exception handler turns them into structured responses carrying the kind,
so callers can tell "not found" from "invalid state" from "unauthorized"
without parsing messages.

Exception Hierarchy:
    DomainError (base)
    ├── NotFoundError        404  not_found
    ├── InvalidStateError    400  invalid_state
    ├── UnauthorizedError    403  unauthorized
    ├── ConflictError        409  conflict
    └── InternalError        500  internal

Usage:
    from apps.common.exceptions import NotFoundError

    class ContainerNotFoundError(NotFoundError):
        default_message = 'Container not found'
        code = 'container_not_found'
"""


class DomainError(Exception):
    """
    Base exception for all domain rule violations.

    Attributes:
        kind: Machine-checkable failure category.
        code: Specific error code within the kind.
        status_code: HTTP status used at the API boundary.
        message: Human-readable explanation.
        extra: Optional extra fields included in the response body.
    """

    kind = 'error'
    code = 'error'
    status_code = 400
    default_message = 'Request could not be completed'

    def __init__(self, message=None, **extra):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self):
        """Return the response body for this error."""
        payload = {
            'error': self.message,
            'kind': self.kind,
            'code': self.code,
        }
        payload.update(self.extra)
        return payload


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""
    kind = 'not_found'
    code = 'not_found'
    status_code = 404
    default_message = 'Not found'


class InvalidStateError(DomainError):
    """Raised when an operation is not valid for the entity's current state."""
    kind = 'invalid_state'
    code = 'invalid_state'
    status_code = 400
    default_message = 'Operation not allowed in the current state'


class UnauthorizedError(DomainError):
    """Raised on cross-restaurant or cross-owner access."""
    kind = 'unauthorized'
    code = 'unauthorized'
    status_code = 403
    default_message = 'You do not have permission to perform this action'


class ConflictError(DomainError):
    """Raised when the operation was already applied."""
    kind = 'conflict'
    code = 'conflict'
    status_code = 409
    default_message = 'Operation already applied'


class InternalError(DomainError):
    """Raised when persistence fails in a way the caller cannot fix."""
    kind = 'internal'
    code = 'internal'
    status_code = 500
    default_message = 'Internal server error'
