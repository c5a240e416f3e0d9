"""Shared domain components - Generic repository, query engine and results."""

from app.domains.shared.fields import FieldDescriptor, FieldKind, fields_for
from app.domains.shared.query import FilterCriterion, QueryError, SortCriterion
from app.domains.shared.query_engine import DynamicQueryEngine, PageWindow, paginate
from app.domains.shared.repository import GenericRepository
from app.domains.shared.result import ListMeta, ListResponse, ServiceResult
from app.domains.shared.specifications import Specification

__all__ = [
    "DynamicQueryEngine",
    "FieldDescriptor",
    "FieldKind",
    "FilterCriterion",
    "GenericRepository",
    "ListMeta",
    "ListResponse",
    "PageWindow",
    "QueryError",
    "ServiceResult",
    "SortCriterion",
    "Specification",
    "fields_for",
    "paginate",
]
