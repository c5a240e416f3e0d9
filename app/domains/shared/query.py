"""Filter and sort criteria for listing requests.

Listing endpoints accept two structured-text parameters::

    filters=[{"id": "RoleId", "value": "2"}]
    sorting=[{"id": "LastName", "desc": false}]

This module decodes them into ordered criteria lists and defines the errors
raised anywhere in the query pipeline.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


# ==================== Errors ====================


class QueryError(ValueError):
    """Base class for errors raised while building a listing query."""


class MalformedFilterSyntax(QueryError):
    """The filter parameter does not decode to a list of ``{id, value}`` objects."""


class MalformedSortSyntax(QueryError):
    """The sorting parameter does not decode to a list of ``{id, desc}`` objects."""


class TypeCoercionFailure(QueryError):
    """A raw filter value cannot be converted to the field's declared kind."""

    def __init__(self, field_name: str, raw_value: str | None, kind: str) -> None:
        self.field_name = field_name
        self.raw_value = raw_value
        self.kind = kind
        if raw_value is None:
            message = f"Field '{field_name}' of kind '{kind}' cannot be filtered or sorted on"
        else:
            message = f"Value '{raw_value}' is not a valid {kind} for field '{field_name}'"
        super().__init__(message)


class UnknownFieldError(QueryError):
    """A criterion names a field the entity does not have (strict mode only)."""

    def __init__(self, field_name: str, entity: str) -> None:
        self.field_name = field_name
        self.entity = entity
        super().__init__(f"Field '{field_name}' does not exist on {entity}")


class InvalidPageWindow(QueryError):
    """A negative ``start`` or ``size`` was requested."""


# ==================== Criteria ====================


class FilterCriterion(BaseModel):
    """One equality constraint: ``field_name == coerce(raw_value)``."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    field_name: str = Field(..., alias="id", min_length=1)
    raw_value: str = Field(..., alias="value")


class SortCriterion(BaseModel):
    """One ordering key."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field_name: str = Field(..., alias="id", min_length=1)
    descending: bool = Field(default=False, alias="desc")


_filters_adapter = TypeAdapter(list[FilterCriterion])
_sort_adapter = TypeAdapter(list[SortCriterion])


def parse_filters(text: str | None) -> list[FilterCriterion]:
    """Decode the ``filters`` parameter.

    Empty or missing text yields no criteria.

    Raises:
        MalformedFilterSyntax: If the text is not a JSON list of ``{id, value}``
    """
    if not text:
        return []
    try:
        return _filters_adapter.validate_json(text)
    except ValidationError as exc:
        raise MalformedFilterSyntax(f"Invalid filters parameter: {text!r}") from exc


def parse_sort(text: str | None) -> list[SortCriterion]:
    """Decode the ``sorting`` parameter.

    Empty or missing text yields no criteria.

    Raises:
        MalformedSortSyntax: If the text is not a JSON list of ``{id, desc}``
    """
    if not text:
        return []
    try:
        return _sort_adapter.validate_json(text)
    except ValidationError as exc:
        raise MalformedSortSyntax(f"Invalid sorting parameter: {text!r}") from exc
