"""Dynamic query engine for listing endpoints.

Turns a free-text global filter, a list of field equality filters and a list
of sort keys into a filtered and ordered ``Select`` for any mapped model,
then slices it into a page. Statements are never executed here; callers run
the count and the page query themselves.
"""

import logging
import operator
from collections.abc import Sequence
from dataclasses import dataclass
from functools import reduce
from typing import Any

from sqlalchemy import Select

from app.core.config import settings
from app.domains.shared.fields import FieldDescriptor, FieldKind, FieldRegistry, fields_for
from app.domains.shared.query import (
    FilterCriterion,
    InvalidPageWindow,
    SortCriterion,
    TypeCoercionFailure,
    UnknownFieldError,
    parse_filters,
    parse_sort,
)
from app.domains.shared.specifications import (
    FalseSpecification,
    FieldContainsSpec,
    FieldEqualsSpec,
    Specification,
    TrueSpecification,
)
from app.infra.database import Base

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageWindow:
    """Zero-based ``[start, start + size)`` slice of a result set."""

    start: int = 0
    size: int = 10

    def __post_init__(self) -> None:
        if self.start < 0:
            raise InvalidPageWindow(f"start must be >= 0, got {self.start}")
        if self.size < 0:
            raise InvalidPageWindow(f"size must be >= 0, got {self.size}")

    def apply(self, stmt: Select[Any]) -> Select[Any]:
        """Skip ``start`` rows and keep at most ``size``."""
        return stmt.offset(self.start).limit(self.size)


def paginate(stmt: Select[Any], start: int, size: int) -> Select[Any]:
    """Apply a page window to an already filtered and ordered statement.

    Raises:
        InvalidPageWindow: If ``start`` or ``size`` is negative
    """
    return PageWindow(start, size).apply(stmt)


class DynamicQueryEngine:
    """Applies runtime filter and sort criteria to a model's ``Select``.

    Args:
        strict_fields: Raise UnknownFieldError for unknown field names instead
            of skipping the criterion. Defaults to ``settings.QUERY_STRICT_FIELDS``.
        multi_key_sort: Combine all sort criteria into one composite ordering.
            When False, each criterion replaces the previous ordering so only
            the last resolvable one takes effect. Defaults to
            ``settings.QUERY_MULTI_KEY_SORT``.

    Example:
        engine = DynamicQueryEngine()
        stmt = engine.apply_text(
            select(Shift), Shift,
            filters='[{"id": "RoleId", "value": "2"}]',
        )
    """

    def __init__(
        self,
        *,
        strict_fields: bool | None = None,
        multi_key_sort: bool | None = None,
    ) -> None:
        self.strict_fields = (
            settings.QUERY_STRICT_FIELDS if strict_fields is None else strict_fields
        )
        self.multi_key_sort = (
            settings.QUERY_MULTI_KEY_SORT if multi_key_sort is None else multi_key_sort
        )

    def apply_text(
        self,
        stmt: Select[Any],
        model: type[Base],
        global_filter: str | None = None,
        filters: str | None = None,
        sorting: str | None = None,
    ) -> Select[Any]:
        """Parse the structured-text parameters and apply them.

        Raises:
            MalformedFilterSyntax: If ``filters`` is not valid
            MalformedSortSyntax: If ``sorting`` is not valid
            TypeCoercionFailure: If a filter value does not fit its field
        """
        return self.apply(
            stmt,
            model,
            global_filter=global_filter,
            filters=parse_filters(filters),
            sorting=parse_sort(sorting),
        )

    def apply(
        self,
        stmt: Select[Any],
        model: type[Base],
        *,
        global_filter: str | None = None,
        filters: Sequence[FilterCriterion] = (),
        sorting: Sequence[SortCriterion] = (),
    ) -> Select[Any]:
        """Apply global filter, custom filters and sorting, in that order."""
        registry = fields_for(model)

        if global_filter:
            stmt = stmt.where(self.global_filter_spec(registry, global_filter).to_expression())

        if filters:
            specs = self.filter_specs(registry, filters)
            if specs:
                combined = reduce(operator.and_, specs, TrueSpecification())
                stmt = stmt.where(combined.to_expression())

        if sorting:
            stmt = self.apply_sorting(stmt, registry, sorting)

        return stmt

    def global_filter_spec(self, registry: FieldRegistry, text: str) -> Specification:
        """OR of substring matches across every text field.

        A model without text fields matches nothing.
        """
        specs = [FieldContainsSpec(field.column, text) for field in registry.text_fields]
        return reduce(operator.or_, specs, FalseSpecification())

    def filter_specs(
        self,
        registry: FieldRegistry,
        filters: Sequence[FilterCriterion],
    ) -> list[Specification]:
        """One equality spec per resolvable filter, in listed order."""
        specs: list[Specification] = []
        for criterion in filters:
            field = self._resolve(registry, criterion.field_name)
            if field is None:
                continue
            specs.append(FieldEqualsSpec(field.column, field.coerce(criterion.raw_value)))
        return specs

    def apply_sorting(
        self,
        stmt: Select[Any],
        registry: FieldRegistry,
        sorting: Sequence[SortCriterion],
    ) -> Select[Any]:
        """Replace the statement's ordering with the resolvable sort criteria.

        The primary key is always appended as the final key so ties on a
        non-unique column keep a stable order across pages.
        """
        orderings = []
        for criterion in sorting:
            field = self._resolve(registry, criterion.field_name)
            if field is None:
                continue
            if field.kind is FieldKind.OTHER:
                raise TypeCoercionFailure(field.name, None, field.kind.value)
            ordering = field.column.desc() if criterion.descending else field.column.asc()
            if self.multi_key_sort:
                orderings.append(ordering)
            else:
                orderings = [ordering]

        if not orderings:
            return stmt
        return stmt.order_by(None).order_by(*orderings, registry.model.id.asc())

    def _resolve(self, registry: FieldRegistry, field_name: str) -> FieldDescriptor | None:
        field = registry.resolve(field_name)
        if field is None:
            if self.strict_fields:
                raise UnknownFieldError(field_name, registry.model.__name__)
            logger.debug(
                "Skipping unknown field %r for %s", field_name, registry.model.__name__
            )
        return field
