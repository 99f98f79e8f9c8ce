from contextlib import AbstractAsyncContextManager
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

T = TypeVar("T", bound=SQLModel)


class RepositoryError(Exception):
    """Custom exception for repository errors."""

    pass


class BaseRepository(Generic[T]):
    model: Type[T]

    def __init__(
        self, get_session: Callable[[], AbstractAsyncContextManager[AsyncSession]]
    ):
        self.get_session = get_session

    def _handle_db_error(self, error: SQLAlchemyError, operation: str) -> None:
        """Handle database errors and raise appropriate exceptions."""
        if isinstance(error, IntegrityError):
            raise RepositoryError(
                f"Database integrity error during {operation}: {error}"
            ) from error
        else:
            raise RepositoryError(
                f"Database error during {operation}: {error}"
            ) from error

    def _build_select_stmt(self, order_by: Any = None, **filters) -> Any:
        """Build select statement with optional equality filters and ordering."""
        stmt = select(self.model)

        for field, value in filters.items():
            if hasattr(self.model, field):
                stmt = stmt.where(getattr(self.model, field) == value)

        if order_by is not None:
            stmt = stmt.order_by(order_by)

        return stmt

    # ----------------- CRUD ----------------- #
    async def get(self, item_id: Any) -> Optional[T]:
        """Get a single item by ID."""
        async with self.get_session() as db:
            try:
                return await db.get(self.model, item_id)
            except SQLAlchemyError as e:
                self._handle_db_error(e, "get")

    async def get_many(self, order_by: Any = None, **filters) -> List[T]:  # type:ignore
        """Get every item matching the filters."""
        async with self.get_session() as db:
            try:
                stmt = self._build_select_stmt(order_by=order_by, **filters)
                result = await db.exec(stmt)
                return list(result.all())
            except SQLAlchemyError as e:
                self._handle_db_error(e, "get_many")

    async def count(self, **filters) -> int:  # type:ignore
        """Count items matching optional filters."""
        async with self.get_session() as db:
            try:
                stmt = self._build_select_stmt(**filters)
                count_stmt = select(func.count()).select_from(stmt.subquery())
                result = await db.exec(count_stmt)
                return result.one()
            except SQLAlchemyError as e:
                self._handle_db_error(e, "count")

    async def create(self, obj: T) -> T:  # type:ignore
        """Persist a fully built item."""
        async with self.get_session() as db:
            try:
                db.add(obj)
                await db.commit()
                await db.refresh(obj)
                return obj
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "create")

    async def update(self, item_id: Any, update_data: Dict[str, Any]) -> Optional[T]:
        """Update an existing item, returning None when it does not exist."""
        # Remove ID from update data to prevent changing primary key
        update_data = {k: v for k, v in update_data.items() if k != "id"}

        if not update_data:
            raise RepositoryError("No data provided for update")

        async with self.get_session() as db:
            try:
                db_obj = await db.get(self.model, item_id)
                if not db_obj:
                    return None

                for key, value in update_data.items():
                    if hasattr(db_obj, key):
                        setattr(db_obj, key, value)

                db.add(db_obj)
                await db.commit()
                await db.refresh(db_obj)
                return db_obj
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "update")

    async def delete(self, item_id: Any) -> bool:  # type:ignore
        """Permanently delete the item from DB."""
        async with self.get_session() as db:
            try:
                db_obj = await db.get(self.model, item_id)
                if not db_obj:
                    return False

                await db.delete(db_obj)
                await db.commit()
                return True
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "delete")
