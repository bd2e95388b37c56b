# app/services/errors.py
"""
Domain errors raised by the services and the lifecycle engine.
main.py maps each class to an HTTP status; the message is shown to the caller as-is.
"""


class LifecycleError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LifecycleError):
    """Rejected before any write: bad input or a broken invariant."""
    status_code = 400


class ConflictError(LifecycleError):
    """Duplicate unique value, or the current state forbids the operation."""
    status_code = 409

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class NotFoundError(LifecycleError):
    status_code = 404


class PermissionDeniedError(LifecycleError):
    status_code = 403
