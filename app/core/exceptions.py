from fastapi import Request, status
from fastapi.responses import ORJSONResponse


class AppError(Exception):
    """Base application error, rendered as {"error": message}."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class MethodNotAllowedError(AppError):
    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message, status_code=status.HTTP_405_METHOD_NOT_ALLOWED)


def error_response(exc: AppError) -> ORJSONResponse:
    return ORJSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def app_exception_handler(request: Request, exc: AppError) -> ORJSONResponse:
    return error_response(exc)


async def generic_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    from app.core.logging import get_logger
    get_logger(__name__).exception(
        "unhandled_exception",
        path=request.url.path,
        request_id=getattr(request.state, "request_id", None),
        exc_info=exc,
    )
    return ORJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )
