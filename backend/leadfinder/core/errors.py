"""HTTP-aware error types raised by the lead pipeline and the API layer."""


class ApiError(RuntimeError):
    """Base error carrying the HTTP status the API layer should answer with."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ApiError):
    status_code = 400
    default_message = "Bad Request"


class UnauthorizedError(ApiError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(ApiError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not Found"


class TooManyRequestsError(ApiError):
    status_code = 429
    default_message = "Too many requests from this IP, please try again after a minute"


class InternalError(ApiError):
    status_code = 500
    default_message = "Internal Server Error"
