"""
Error taxonomy shared by every blueprint.

Handlers raise these; the application-level handlers registered in
``sexed.app`` turn them into ``{"success": false, "error": ...}`` bodies.
"""


class APIError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "error": self.message}


class ValidationError(APIError):
    status_code = 400


class AuthenticationError(APIError):
    status_code = 401


class PermissionDenied(APIError):
    status_code = 403


class NotFoundError(APIError):
    status_code = 404


class ConflictError(APIError):
    status_code = 409


class ConcurrentUpdateError(ConflictError):
    """A version-checked write lost the race against another request."""

    def __init__(self, key):
        super().__init__(f"Concurrent update on '{key}', please retry")
        self.key = key
