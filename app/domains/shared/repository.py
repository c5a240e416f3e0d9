"""Generic Async Repository Pattern for DDD.

This module provides a generic repository base class that handles
common CRUD operations with full async support using SQLAlchemy 2.0,
plus the listing primitives used by the dynamic query engine.
"""

from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.domains.shared.query_engine import PageWindow
from app.infra.database import Base

# Type variables for generic repository
ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class GenericRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Generic async repository providing standard CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class
        CreateSchemaType: Pydantic schema for creation
        UpdateSchemaType: Pydantic schema for updates

    Example:
        class RoleRepository(GenericRepository[Role, RoleCreate, RoleUpdate]):
            def __init__(self, session: AsyncSession):
                super().__init__(Role, session)
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            session: Async database session
        """
        self._model = model
        self._session = session

    @property
    def model(self) -> type[ModelType]:
        """Get the model class."""
        return self._model

    # ==================== CREATE Operations ====================

    async def create(self, data: CreateSchemaType | dict[str, Any]) -> ModelType:
        """Create a new record.

        Args:
            data: Pydantic schema or dict with creation data

        Returns:
            The created model instance
        """
        if isinstance(data, BaseModel):
            obj_data = data.model_dump(exclude_unset=True)
        else:
            obj_data = data

        db_obj = self._model(**obj_data)
        self._session.add(db_obj)
        await self._session.flush()
        await self._session.refresh(db_obj)
        return db_obj

    # ==================== READ Operations ====================

    def query(self) -> Select[tuple[ModelType]]:
        """Base statement for listings, ordered by id.

        Sort criteria applied later replace this ordering.
        """
        return select(self._model).order_by(self._model.id)

    async def get_by_id(
        self,
        id: int,
        *,
        load_relations: list[str] | None = None,
    ) -> ModelType | None:
        """Get a record by its ID.

        Args:
            id: The primary key of the record
            load_relations: Optional list of relationship names to eager load

        Returns:
            The model instance or None if not found
        """
        stmt = select(self._model).where(self._model.id == id)
        stmt = self._apply_eager_loading(stmt, load_relations)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_update(self, id: int) -> ModelType | None:
        """Get a record by ID and lock its row until the transaction ends.

        Backends without row locks (SQLite) ignore the lock.
        """
        stmt = select(self._model).where(self._model.id == id).with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_many(
        self,
        *conditions: Any,
        order_by: Any | None = None,
        load_relations: list[str] | None = None,
    ) -> Sequence[ModelType]:
        """Find all records matching the conditions.

        Args:
            *conditions: SQLAlchemy filter conditions
            order_by: Column or list of columns for ordering
            load_relations: Optional list of relationship names to eager load

        Returns:
            Sequence of model instances
        """
        stmt = select(self._model)
        if conditions:
            stmt = stmt.where(*conditions)
        stmt = self._apply_ordering(stmt, order_by)
        stmt = self._apply_eager_loading(stmt, load_relations)

        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def count_query(self, stmt: Select[Any]) -> int:
        """Count the rows an arbitrary statement would return."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        result = await self._session.execute(count_stmt)
        return result.scalar() or 0

    async def find_page(
        self,
        stmt: Select[tuple[ModelType]],
        *,
        start: int = 0,
        size: int = 10,
        load_relations: list[str] | None = None,
    ) -> tuple[Sequence[ModelType], int]:
        """Materialise one page of a filtered, ordered statement.

        Args:
            stmt: Statement already filtered and ordered
            start: Zero-based offset of the first row
            size: Maximum rows to return
            load_relations: Relationships to eager load on the page rows

        Returns:
            Tuple of (page rows, total rows before pagination)

        Raises:
            InvalidPageWindow: If ``start`` or ``size`` is negative
        """
        window = PageWindow(start, size)
        total = await self.count_query(stmt)

        page_stmt = self._apply_eager_loading(window.apply(stmt), load_relations)
        result = await self._session.execute(page_stmt)
        return result.scalars().all(), total

    # ==================== UPDATE Operations ====================

    async def update(
        self,
        id: int,
        data: UpdateSchemaType | dict[str, Any],
    ) -> ModelType | None:
        """Update a record by ID.

        Args:
            id: The primary key of the record to update
            data: Pydantic schema or dict with update data

        Returns:
            The updated model instance or None if not found
        """
        db_obj = await self.get_by_id(id)
        if db_obj is None:
            return None

        if isinstance(data, BaseModel):
            update_data = data.model_dump(exclude_unset=True)
        else:
            update_data = data

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await self._session.flush()
        await self._session.refresh(db_obj)
        return db_obj

    # ==================== DELETE Operations ====================

    async def delete(self, id: int) -> bool:
        """Delete a record by ID.

        Args:
            id: The primary key of the record to delete

        Returns:
            True if deleted, False if not found
        """
        db_obj = await self.get_by_id(id)
        if db_obj is None:
            return False

        await self._session.delete(db_obj)
        await self._session.flush()
        return True

    # ==================== Helper Methods ====================

    def _apply_eager_loading(
        self,
        stmt: Select[tuple[ModelType]],
        load_relations: list[str] | None,
    ) -> Select[tuple[ModelType]]:
        """Apply eager loading for relationships."""
        if load_relations:
            for relation in load_relations:
                stmt = stmt.options(selectinload(getattr(self._model, relation)))
        return stmt

    def _apply_ordering(
        self,
        stmt: Select[tuple[ModelType]],
        order_by: Any | None,
    ) -> Select[tuple[ModelType]]:
        """Apply ordering to the query, by id when none is given."""
        if order_by is None:
            return stmt.order_by(self._model.id)
        if isinstance(order_by, (list, tuple)):
            return stmt.order_by(*order_by)
        return stmt.order_by(order_by)

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        await self._session.rollback()
