from typing import Callable, Dict, Optional, Sequence, Type

from fastapi import HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute

from core.exceptions import (
    ExerciseError,
    MissingFieldError,
    InvalidFieldError,
    OverlapConflictError,
    ExerciseNotFoundError,
    InvalidUserSelectorError,
    StorageFailureError,
)

ERROR_STATUS_CODES: Dict[Type[ExerciseError], int] = {
    MissingFieldError: status.HTTP_400_BAD_REQUEST,
    InvalidFieldError: status.HTTP_400_BAD_REQUEST,
    InvalidUserSelectorError: status.HTTP_400_BAD_REQUEST,
    OverlapConflictError: status.HTTP_409_CONFLICT,
    ExerciseNotFoundError: status.HTTP_404_NOT_FOUND,
    StorageFailureError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

REQUEST_LOCATIONS = ("body", "path", "query")


def to_http_exception(error: ExerciseError) -> HTTPException:
    """Translate a domain error into the HTTPException returned to the client."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type in type(error).__mro__:
        if error_type in ERROR_STATUS_CODES:
            status_code = ERROR_STATUS_CODES[error_type]
            break
    return HTTPException(status_code=status_code, detail=error.to_dict())


def _field_from_location(location: Sequence) -> Optional[str]:
    parts = [str(part) for part in location if isinstance(part, str)]
    if parts and parts[0] in REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts) or None


def from_validation_error(error: RequestValidationError) -> ExerciseError:
    """
    Reduce a request validation failure to a single error kind.
    Only the first reported problem is kept.
    """
    first = error.errors()[0]
    field = _field_from_location(first.get("loc", ()))
    if first.get("type") == "missing":
        return MissingFieldError(field or "body")
    if field is None:
        return InvalidFieldError("body", "Invalid request body")
    return InvalidFieldError(field, f"Invalid {field}: {first.get('msg', 'invalid value')}")


class ExerciseRoute(APIRoute):
    """Route class answering malformed requests with the same rejection body as the use cases."""

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def custom_route_handler(request: Request) -> Response:
            try:
                return await original_route_handler(request)
            except RequestValidationError as e:
                raise to_http_exception(from_validation_error(e))

        return custom_route_handler
