from typing import Any, Callable, List, Optional, Type

from fastapi import APIRouter, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from miniblog.core import exceptions
from miniblog.core.bases.base_service import BaseService
from miniblog.core.response.handlers import exception_response, success_response


class BaseRouter:
    """Base router class with automatic CRUD endpoints.

    Routes are registered on the collection path itself (no trailing slash)
    and answer with the bare serialized item or list; only deletes answer
    with the ``BaseResponse`` envelope. Service exceptions are mapped to
    their status code and error code.
    """

    def __init__(
        self,
        service: BaseService,
        response_schema: Type[BaseModel],
        tags: Optional[List[str]] = None,
        prefix: str = "",
        create_schema: Optional[Type[BaseModel]] = None,
        update_schema: Optional[Type[BaseModel]] = None,
        entity_name: str = "Item",
        dependencies: Optional[List[Callable]] = None,
    ):
        self.service = service
        self.tags = tags or [self.__class__.__name__.replace("Router", "")]
        self.prefix = prefix
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.response_schema = response_schema
        self.entity_name = entity_name

        # Create router
        self.router = APIRouter(
            prefix=self.prefix,
            tags=self.tags,  # type:ignore
            dependencies=dependencies or [],  # type:ignore
        )

        # Register routes
        self._register_routes()

    def _register_routes(self) -> None:
        """Register all CRUD routes."""
        self._register_list()
        self._register_create()
        self._register_update()
        self._register_delete()

    def _serialize(self, item: Any) -> Any:
        return jsonable_encoder(
            self.response_schema.model_validate(item).model_dump(by_alias=True)
        )

    def _register_list(self) -> None:
        """Register GET route on the collection."""
        @self.router.get(
            "",
            summary=f"List {self.entity_name.lower()}s",
            responses={
                200: {"description": "Items retrieved successfully"},
                500: {"description": "Internal server error"},
            },
        )
        async def list_items():
            try:
                items = await self.service.get_list()
                return JSONResponse(content=[self._serialize(item) for item in items])
            except exceptions.ServiceException as e:
                return exception_response(e)

    def _register_create(self) -> None:
        """Register POST route on the collection."""
        if not self.create_schema:
            return

        @self.router.post(
            "",
            status_code=status.HTTP_201_CREATED,
            summary=f"Create new {self.entity_name.lower()}",
            responses={
                201: {"description": "Item created successfully"},
                400: {"description": "Validation error"},
                500: {"description": "Internal server error"},
            },
        )
        async def create_item(item_data: self.create_schema):  # type: ignore
            try:
                item = await self.service.create(item_data)
                return JSONResponse(
                    status_code=status.HTTP_201_CREATED,
                    content=self._serialize(item),
                )
            except exceptions.ServiceException as e:
                return exception_response(e)

    def _register_update(self) -> None:
        """Register PUT /{item_id} route."""
        if not self.update_schema:
            return

        @self.router.put(
            "/{item_id}",
            summary=f"Update {self.entity_name.lower()}",
            responses={
                200: {"description": "Item updated successfully"},
                400: {"description": "Validation error"},
                404: {"description": "Item not found"},
                500: {"description": "Internal server error"},
            },
        )
        async def update_item(item_id: str, item_data: self.update_schema):  # type: ignore
            try:
                item = await self.service.update(item_id, item_data)
                return JSONResponse(content=self._serialize(item))
            except exceptions.ServiceException as e:
                return exception_response(e)

    def _register_delete(self) -> None:
        """Register DELETE /{item_id} route (permanent delete)."""
        @self.router.delete(
            "/{item_id}",
            summary=f"Delete {self.entity_name.lower()}",
            responses={
                200: {"description": "Item deleted successfully"},
                404: {"description": "Item not found"},
                500: {"description": "Internal server error"},
            },
        )
        async def delete_item(item_id: str):
            try:
                await self.service.delete(item_id)
                return success_response(
                    message=f"{self.entity_name} deleted successfully"
                )
            except exceptions.ServiceException as e:
                return exception_response(e)

    def get_router(self) -> APIRouter:
        """Get the FastAPI router instance."""
        return self.router
