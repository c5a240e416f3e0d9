"""Role management service."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.shared.listing import list_entities
from app.domains.shared.query_engine import DynamicQueryEngine
from app.domains.shared.result import FailureKind, ListResponse, ServiceResult
from app.domains.staff.repository import RoleRepository
from app.domains.staff.schemas import RoleCreate, RoleResponse, RoleUpdate

logger = logging.getLogger(__name__)


class RoleService:
    """Service for Role business logic."""

    def __init__(
        self,
        session: AsyncSession,
        query_engine: DynamicQueryEngine | None = None,
    ) -> None:
        self.session = session
        self.repository = RoleRepository(session)
        self.query_engine = query_engine or DynamicQueryEngine()

    async def list_roles(
        self,
        *,
        start: int = 0,
        size: int = 10,
        global_filter: str | None = None,
        filters: str | None = None,
        sorting: str | None = None,
    ) -> ServiceResult[ListResponse[RoleResponse]]:
        """Filtered, sorted, paginated role listing."""
        return await list_entities(
            self.repository,
            self.query_engine,
            RoleResponse.model_validate,
            start=start,
            size=size,
            global_filter=global_filter,
            filters=filters,
            sorting=sorting,
        )

    async def list_all_roles(self) -> ServiceResult[list[RoleResponse]]:
        """Every role, unfiltered."""
        try:
            roles = await self.repository.find_many()
        except SQLAlchemyError as exc:
            logger.exception("Failed to load roles")
            return ServiceResult.failure(
                str(exc), "An error occurred while loading roles.", FailureKind.PERSISTENCE
            )

        return ServiceResult.success([RoleResponse.model_validate(r) for r in roles])

    async def get_role(self, role_id: int) -> ServiceResult[RoleResponse]:
        try:
            role = await self.repository.get_by_id(role_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load role %s", role_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while loading the role.", FailureKind.PERSISTENCE
            )

        if role is None:
            logger.warning("Role %s not found", role_id)
            return ServiceResult.failure(
                f"Role with ID {role_id} not found.", kind=FailureKind.NOT_FOUND
            )
        return ServiceResult.success(
            RoleResponse.model_validate(role), "Role retrieved successfully."
        )

    async def create_role(self, data: RoleCreate) -> ServiceResult[RoleResponse]:
        try:
            role = await self.repository.create(data)
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.repository.rollback()
            logger.exception("Failed to create role %r", data.name)
            return ServiceResult.failure(
                str(exc), "An error occurred while adding the role.", FailureKind.PERSISTENCE
            )

        logger.info("Created role %s (%s)", role.id, role.name)
        return ServiceResult.success(RoleResponse.model_validate(role), "Role added successfully.")

    async def update_role(self, role_id: int, data: RoleUpdate) -> ServiceResult[RoleResponse]:
        try:
            role = await self.repository.update(role_id, data)
            if role is None:
                logger.warning("Cannot update role %s: not found", role_id)
                return ServiceResult.failure(
                    f"Role with ID {role_id} not found.", kind=FailureKind.NOT_FOUND
                )
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.repository.rollback()
            logger.exception("Failed to update role %s", role_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while updating the role.", FailureKind.PERSISTENCE
            )

        logger.info("Updated role %s", role_id)
        return ServiceResult.success(
            RoleResponse.model_validate(role), "Role updated successfully."
        )

    async def delete_role(self, role_id: int) -> ServiceResult[None]:
        """Delete a role. Fails while shifts still reference it."""
        try:
            deleted = await self.repository.delete(role_id)
            if not deleted:
                logger.warning("Cannot delete role %s: not found", role_id)
                return ServiceResult.failure(
                    f"Role with ID {role_id} not found.", kind=FailureKind.NOT_FOUND
                )
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.repository.rollback()
            logger.exception("Failed to delete role %s", role_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while deleting the role.", FailureKind.PERSISTENCE
            )

        logger.info("Deleted role %s", role_id)
        return ServiceResult.success(message="Role deleted successfully.")

    async def roles_for_employee(self, employee_id: int) -> ServiceResult[list[RoleResponse]]:
        try:
            roles = await self.repository.find_by_employee(employee_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load roles of employee %s", employee_id)
            return ServiceResult.failure(
                str(exc), "An error occurred while loading roles.", FailureKind.PERSISTENCE
            )

        return ServiceResult.success([RoleResponse.model_validate(r) for r in roles])
