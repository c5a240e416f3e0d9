"""Per-model field registry used by the dynamic query engine.

For every mapped model the registry exposes its column attributes by name,
together with a declared value kind that decides two things: which fields the
global text search looks at, and how a raw filter value is converted before
comparison. The table is built from the SQLAlchemy mapper the first time a
model is requested and cached for the life of the process.
"""

import enum
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, time
from functools import cache
from operator import attrgetter
from typing import Any

from sqlalchemy import Boolean, Date, Enum, Integer, String, Time, inspect
from sqlalchemy.orm import InstrumentedAttribute

from app.domains.shared.query import TypeCoercionFailure
from app.infra.database import Base


class FieldKind(str, enum.Enum):
    """Declared value kind of a model field."""

    TEXT = "text"
    INTEGER = "integer"
    DATE = "date"
    TIME = "time"
    BOOLEAN = "boolean"
    OTHER = "other"


def _parse_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"invalid boolean: {raw!r}")


# OTHER has no entry: such fields cannot be filtered or sorted on
COERCERS: dict[FieldKind, Callable[[str], Any]] = {
    FieldKind.TEXT: str,
    FieldKind.INTEGER: int,
    FieldKind.DATE: date.fromisoformat,
    FieldKind.TIME: time.fromisoformat,
    FieldKind.BOOLEAN: _parse_bool,
}


def classify(column_type: Any) -> FieldKind:
    """Map a SQLAlchemy column type to a FieldKind."""
    # Enum subclasses String, check it first
    if isinstance(column_type, Enum):
        return FieldKind.OTHER
    if isinstance(column_type, String):
        return FieldKind.TEXT
    if isinstance(column_type, Boolean):
        return FieldKind.BOOLEAN
    if isinstance(column_type, Integer):
        return FieldKind.INTEGER
    if isinstance(column_type, Date):
        return FieldKind.DATE
    if isinstance(column_type, Time):
        return FieldKind.TIME
    return FieldKind.OTHER


def normalize_name(name: str) -> str:
    """Lookup key for a field name: case-insensitive, underscores ignored.

    ``RoleId``, ``roleId`` and ``role_id`` all normalise to ``roleid``.
    """
    return name.replace("_", "").lower()


@dataclass(frozen=True)
class FieldDescriptor:
    """A named, typed field of a mapped model.

    Attributes:
        name: Attribute name on the model
        kind: Declared value kind
        column: Instrumented attribute, used to build SQL expressions
        accessor: Reads the field from a loaded entity
    """

    name: str
    kind: FieldKind
    column: InstrumentedAttribute
    accessor: Callable[[Any], Any]

    def coerce(self, raw_value: str) -> Any:
        """Convert a raw filter value to this field's kind.

        Raises:
            TypeCoercionFailure: If the kind is OTHER or the value does not parse
        """
        coercer = COERCERS.get(self.kind)
        if coercer is None:
            raise TypeCoercionFailure(self.name, raw_value, self.kind.value)
        try:
            return coercer(raw_value)
        except (TypeError, ValueError) as exc:
            raise TypeCoercionFailure(self.name, raw_value, self.kind.value) from exc


class FieldRegistry:
    """Immutable name -> FieldDescriptor table for one model."""

    def __init__(self, model: type[Base], descriptors: list[FieldDescriptor]) -> None:
        self.model = model
        self._fields = tuple(descriptors)
        self._by_key = {normalize_name(d.name): d for d in self._fields}

    @property
    def fields(self) -> tuple[FieldDescriptor, ...]:
        """All fields in declaration order."""
        return self._fields

    @property
    def text_fields(self) -> tuple[FieldDescriptor, ...]:
        """Fields eligible for the global text search."""
        return tuple(d for d in self._fields if d.kind is FieldKind.TEXT)

    def resolve(self, field_name: str) -> FieldDescriptor | None:
        """Look a field up by name, or return None if the model has no such field."""
        return self._by_key.get(normalize_name(field_name))

    def __contains__(self, field_name: str) -> bool:
        return self.resolve(field_name) is not None


@cache
def fields_for(model: type[Base]) -> FieldRegistry:
    """Return the cached field registry of a mapped model."""
    mapper = inspect(model)
    descriptors = []
    for attr in mapper.column_attrs:
        column = attr.columns[0]
        descriptors.append(
            FieldDescriptor(
                name=attr.key,
                kind=classify(column.type),
                column=getattr(model, attr.key),
                accessor=attrgetter(attr.key),
            )
        )
    return FieldRegistry(model, descriptors)
