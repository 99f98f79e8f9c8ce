from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from sqlmodel import SQLModel

from miniblog.core import exceptions
from miniblog.core.bases.base_repository import BaseRepository, RepositoryError
from miniblog.core.logging import get_logger
from miniblog.core.response.schemas import ErrorDetail

T = TypeVar("T", bound=SQLModel)

logger = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseService(Generic[T]):
    """Base service wiring a repository to the service exception taxonomy.

    Subclasses override the ``_validate_*`` hooks for business rules; any
    repository failure is logged and re-raised as an InternalException.
    """

    not_found_message = "Item not found"

    def __init__(
        self,
        repository: BaseRepository[T],
        clock: Optional[Callable[[], datetime]] = None,
        expose_errors: bool = True,
    ):
        self.repository = repository
        self.clock = clock or utc_now
        self.expose_errors = expose_errors

    def _internal_error(
        self, error: RepositoryError, message: str, operation: str
    ) -> exceptions.InternalException:
        logger.error(
            "repository_error",
            model=self.repository.model.__name__,
            operation=operation,
            error=str(error),
        )
        details = []
        if self.expose_errors:
            details.append(
                ErrorDetail(code="REPOSITORY_ERROR", message=str(error))
            )
        return exceptions.InternalException(message, error_details=details)

    async def get_existing(self, item_id: Any, message: str) -> T:
        try:
            item = await self.repository.get(item_id)
        except RepositoryError as e:
            raise self._internal_error(e, message, "get") from e
        if item is None:
            raise exceptions.NotFoundException(self.not_found_message)
        return item

    async def get_list(self) -> List[T]:
        raise NotImplementedError

    async def create(self, item_data: Any) -> T:
        raise NotImplementedError

    async def update(self, item_id: Any, item_data: Any) -> T:
        raise NotImplementedError

    async def delete(self, item_id: Any) -> None:
        raise NotImplementedError

    async def _validate_create(self, create_data: Dict[str, Any]) -> None:
        """Validate data before creation."""
        pass

    async def _validate_update(
        self, item_id: Any, update_data: Dict[str, Any], existing_item: T
    ) -> None:
        """Validate data before update."""
        pass

    async def _validate_delete(self, item_id: Any, existing_item: T) -> None:
        """Validate before delete."""
        pass
