"""Query parameters shared by the listing endpoints."""

from fastapi import Query

from app.core.config import settings


class ListingParams:
    """``start``, ``size``, ``globalFilter``, ``filters`` and ``sorting``.

    Range checks on ``start`` and ``size`` are left to the query engine so that
    a negative window comes back as a listing failure.
    """

    def __init__(
        self,
        start: int = Query(0, description="Zero-based offset of the first row"),
        size: int = Query(settings.DEFAULT_PAGE_SIZE, description="Rows per page"),
        global_filter: str | None = Query(
            None,
            alias="globalFilter",
            description="Substring matched against every text field",
        ),
        filters: str | None = Query(
            None,
            description='JSON list of {"id": field, "value": value} objects',
        ),
        sorting: str | None = Query(
            None,
            description='JSON list of {"id": field, "desc": bool} objects',
        ),
    ) -> None:
        self.start = start
        self.size = size
        self.global_filter = global_filter
        self.filters = filters
        self.sorting = sorting

    def as_kwargs(self) -> dict[str, int | str | None]:
        return {
            "start": self.start,
            "size": self.size,
            "global_filter": self.global_filter,
            "filters": self.filters,
            "sorting": self.sorting,
        }
