"""Listing flow shared by every entity service.

raw statement -> global filter, custom filters, sorting -> total count
-> page window -> materialised rows converted to response schemas.
"""

import logging
from typing import Any, Callable

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from app.domains.shared.query import QueryError
from app.domains.shared.query_engine import DynamicQueryEngine
from app.domains.shared.repository import GenericRepository
from app.domains.shared.result import FailureKind, ListMeta, ListResponse, ServiceResult

logger = logging.getLogger(__name__)


async def list_entities(
    repository: GenericRepository[Any, Any, Any],
    engine: DynamicQueryEngine,
    to_response: Callable[[Any], BaseModel],
    *,
    start: int = 0,
    size: int = 10,
    global_filter: str | None = None,
    filters: str | None = None,
    sorting: str | None = None,
    load_relations: list[str] | None = None,
) -> ServiceResult[ListResponse[Any]]:
    """Run a filtered, sorted, paginated listing for the repository's model.

    Args:
        repository: Repository of the entity being listed
        engine: Query engine applying the filter and sort text
        to_response: Converts one row to its response schema
        start: Zero-based offset of the first row
        size: Maximum rows on the page
        global_filter: Substring searched in every text field
        filters: JSON list of ``{"id": field, "value": raw}`` objects
        sorting: JSON list of ``{"id": field, "desc": bool}`` objects
        load_relations: Relationships to eager load on the page rows

    Query errors (bad filter text, uncoercible values, negative window) and
    persistence errors are returned as failed results.
    """
    entity = repository.model.__name__
    try:
        stmt = engine.apply_text(
            repository.query(),
            repository.model,
            global_filter=global_filter,
            filters=filters,
            sorting=sorting,
        )
        rows, total = await repository.find_page(
            stmt, start=start, size=size, load_relations=load_relations
        )
    except QueryError as exc:
        logger.warning("Rejected %s listing query: %s", entity, exc)
        return ServiceResult.failure(str(exc), "Invalid listing query.", FailureKind.INVALID)
    except SQLAlchemyError as exc:
        logger.exception("Failed to list %s records", entity)
        return ServiceResult.failure(
            str(exc),
            f"An error occurred while listing {entity.lower()} records.",
            FailureKind.PERSISTENCE,
        )

    page = ListResponse(
        data=[to_response(row) for row in rows],
        meta=ListMeta(total_row_count=total),
    )
    return ServiceResult.success(page, f"Retrieved {len(rows)} of {total} records.")
