"""Uniform service results and listing envelopes."""

import enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class FailureKind(str, enum.Enum):
    """Why a service operation failed."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID = "invalid"
    PERSISTENCE = "persistence"


class ServiceResult(BaseModel, Generic[T]):
    """Outcome of a service operation.

    Services return this instead of raising, so the API layer can map
    failures to status codes without catching exceptions.

    Example:
        result = await service.delete_role(3)
        if not result.is_success:
            ...
    """

    is_success: bool
    message: str
    errors: list[str] = Field(default_factory=list)
    data: T | None = None
    failure_kind: FailureKind | None = Field(default=None, exclude=True)

    @classmethod
    def success(
        cls,
        data: Any = None,
        message: str = "Operation completed successfully",
    ) -> "ServiceResult[T]":
        return cls(is_success=True, message=message, data=data)

    @classmethod
    def failure(
        cls,
        errors: str | list[str],
        message: str = "Operation failed",
        kind: FailureKind = FailureKind.INVALID,
    ) -> "ServiceResult[T]":
        if isinstance(errors, str):
            errors = [errors]
        return cls(is_success=False, message=message, errors=errors, failure_kind=kind)


class ListMeta(BaseModel):
    """Listing metadata."""

    model_config = ConfigDict(populate_by_name=True)

    total_row_count: int = Field(
        ...,
        ge=0,
        alias="totalRowCount",
        description="Rows matching the filters, before pagination",
    )


class ListResponse(BaseModel, Generic[T]):
    """One page of a filtered, sorted listing."""

    data: list[T]
    meta: ListMeta
