"""
Service Errors

Exceptions raised by the service layer and routes. app.py turns each into a
JSON error response with the status code carried on the exception.
"""


class ApiError(Exception):
    """Error with an HTTP status and a message safe to show the client."""
    status_code = 400

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}

    def to_dict(self):
        data = {'error': self.message}
        data.update(self.payload)
        return data


class NotFoundError(ApiError):
    """Requested row does not exist."""
    status_code = 404


class ValidationError(ApiError):
    """Request body failed validation. Carries [{field, message}] details."""
    status_code = 400

    def __init__(self, details):
        super().__init__('Validation failed', payload={'details': list(details)})
        self.details = list(details)


class ConflictError(ApiError):
    status_code = 409


class PlanningError(ApiError):
    """No plan can be built under the family's constraints."""
    status_code = 400


class RateLimitError(ApiError):
    """The LLM provider kept returning 429 after all retries."""
    status_code = 429


class LLMConfigError(ApiError):
    status_code = 500


class LLMResponseError(ApiError):
    """The LLM answered with something that is not the JSON we asked for."""
    status_code = 500
