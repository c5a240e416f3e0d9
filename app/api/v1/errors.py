"""Translate failed service results into HTTP errors."""

from typing import TypeVar

from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.domains.shared.result import FailureKind, ServiceResult

T = TypeVar("T")


def raise_for_failure(result: ServiceResult[T]) -> ServiceResult[T]:
    """Return ``result`` unchanged if it succeeded, else raise the matching HTTP error.

    The error detail carries the result body (``is_success``, ``message``,
    ``errors``, ``data``).

    Raises:
        NotFoundError: The target entity does not exist
        ConflictError: The shift overlaps another shift of the employee
        BadRequestError: Any other failure
    """
    if result.is_success:
        return result

    detail = result.model_dump(mode="json")
    if result.failure_kind == FailureKind.NOT_FOUND:
        raise NotFoundError(detail)
    if result.failure_kind == FailureKind.CONFLICT:
        raise ConflictError(detail)
    raise BadRequestError(detail)
