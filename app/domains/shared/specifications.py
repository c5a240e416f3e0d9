"""Specification Pattern for composable query predicates.

Specifications wrap a SQLAlchemy boolean expression so predicates built at
runtime (global text search, per-field equality) can be combined with ``&``
and ``|`` before they are attached to a statement.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlalchemy import and_, false, or_, true
from sqlalchemy.orm import InstrumentedAttribute

from app.infra.database import Base

T = TypeVar("T", bound=Base)


class Specification(ABC, Generic[T]):
    """Abstract base class for specifications.

    Example:
        spec = FieldEqualsSpec(Shift.role_id, 2) & FieldEqualsSpec(Shift.employee_id, 7)
        stmt = select(Shift).where(spec.to_expression())
    """

    @abstractmethod
    def to_expression(self) -> Any:
        """Convert specification to SQLAlchemy expression."""
        ...

    def __and__(self, other: "Specification[T]") -> "AndSpecification[T]":
        """Combine with AND."""
        return AndSpecification(self, other)

    def __or__(self, other: "Specification[T]") -> "OrSpecification[T]":
        """Combine with OR."""
        return OrSpecification(self, other)


class AndSpecification(Specification[T]):
    """Combines two specifications with AND."""

    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self.left = left
        self.right = right

    def to_expression(self) -> Any:
        """Return AND of both specifications."""
        return and_(self.left.to_expression(), self.right.to_expression())


class OrSpecification(Specification[T]):
    """Combines two specifications with OR."""

    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self.left = left
        self.right = right

    def to_expression(self) -> Any:
        """Return OR of both specifications."""
        return or_(self.left.to_expression(), self.right.to_expression())


class TrueSpecification(Specification[T]):
    """A specification that always returns True."""

    def to_expression(self) -> Any:
        """Return a condition that is always true."""
        return true()


class FalseSpecification(Specification[T]):
    """A specification that always returns False."""

    def to_expression(self) -> Any:
        """Return a condition that is always false."""
        return false()


class FieldEqualsSpec(Specification[T]):
    """Column equals a value."""

    def __init__(self, column: InstrumentedAttribute, value: Any) -> None:
        self.column = column
        self.value = value

    def to_expression(self) -> Any:
        return self.column == self.value


class FieldContainsSpec(Specification[T]):
    """Text column contains a literal substring.

    ``%`` and ``_`` in the search text are escaped, so they match themselves.
    Case sensitivity is that of the backend's ``LIKE``.
    """

    def __init__(self, column: InstrumentedAttribute, text: str) -> None:
        self.column = column
        self.text = text

    def to_expression(self) -> Any:
        return self.column.contains(self.text, autoescape=True)
