"""HTTP exceptions raised by the API layer.

Services never raise these; endpoints translate failed service results
into the matching exception.
"""

from fastapi import HTTPException, status


class BadRequestError(HTTPException):
    """Raised for general bad request errors."""

    def __init__(self, detail: str | dict = "Bad request") -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class NotFoundError(HTTPException):
    """Raised when a resource is not found."""

    def __init__(self, detail: str | dict = "Resource not found") -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class ConflictError(HTTPException):
    """Raised when a request conflicts with existing state."""

    def __init__(self, detail: str | dict = "Conflict") -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )
