"""
Starlette Web Adapter

JSON API over the unit resolver:

    GET  /units                                   all units
    GET  /units/{unit_id}                         one unit
    POST /units                                   create a unit from {"goal"}
    PUT  /units/{unit_id}/details                 replace details
    PUT  /units/{unit_id}/criteria                replace criteria
    POST /units/{unit_id}/activities              add an activity
    PUT  /units/{unit_id}/activities/{activity_id}  replace an activity
"""

import json
import logging
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from ..app.resolver import UnitResolver
from ..app.schemas import ActivityInput, CreateUnitInput, Criterion, Details
from ..core.exceptions import NotFoundError, StoreError

logger = logging.getLogger(__name__)

Endpoint = Callable[[Request], Awaitable[Response]]
M = TypeVar("M")

_criteria = TypeAdapter(List[Criterion])


class InvalidBody(Exception):
    """The request body is not valid JSON or does not match its schema."""

    def __init__(self, error: str, detail: Optional[List[Any]] = None, status_code: int = 422):
        super().__init__(error)
        self.error = error
        self.detail = detail
        self.status_code = status_code


async def _body(request: Request, validate: Callable[[Any], M]) -> M:
    try:
        return validate(await request.json())
    except json.JSONDecodeError as e:
        raise InvalidBody(f"Malformed JSON: {e}", status_code=400) from e
    except ValidationError as e:
        raise InvalidBody("Invalid request body",
                          e.errors(include_url=False, include_context=False)) from e


def _dump(model: Any) -> Any:
    if isinstance(model, BaseModel):
        return model.model_dump(mode="json", by_alias=True)
    return [_dump(item) for item in model]


def _handle_errors(endpoint: Endpoint) -> Endpoint:
    """Map resolver, store and request body errors to JSON error responses."""

    async def wrapper(request: Request) -> Response:
        try:
            return await endpoint(request)
        except NotFoundError as e:
            return JSONResponse({"error": str(e)}, status_code=404)
        except InvalidBody as e:
            content = {"error": e.error}
            if e.detail is not None:
                content["detail"] = e.detail
            return JSONResponse(content, status_code=e.status_code)
        except StoreError as e:
            logger.error(f"Store unavailable for {request.url.path}: {e}")
            return JSONResponse({"error": f"Store unavailable: {e}"}, status_code=503)

    wrapper.__name__ = endpoint.__name__
    return wrapper


class UnitRoutes:
    """Request handlers bound to one resolver."""

    def __init__(self, resolver: UnitResolver):
        self.resolver = resolver

    async def list_units(self, request: Request) -> Response:
        return JSONResponse(_dump(self.resolver.units()))

    async def get_unit(self, request: Request) -> Response:
        unit_id = request.path_params["unit_id"]
        unit = self.resolver.unit(unit_id)
        if unit is None:
            return JSONResponse({"error": f"No unit with id '{unit_id}'"}, status_code=404)
        return JSONResponse(_dump(unit))

    async def create_unit(self, request: Request) -> Response:
        body = await _body(request, CreateUnitInput.model_validate)
        return JSONResponse(_dump(self.resolver.create_unit(body.goal)), status_code=201)

    async def update_details(self, request: Request) -> Response:
        details = await _body(request, Details.model_validate)
        self.resolver.update_details(request.path_params["unit_id"], details)
        return Response(status_code=204)

    async def update_criteria(self, request: Request) -> Response:
        criteria = await _body(request, _criteria.validate_python)
        self.resolver.update_criteria(request.path_params["unit_id"], criteria)
        return Response(status_code=204)

    async def add_activity(self, request: Request) -> Response:
        activity = await _body(request, ActivityInput.model_validate)
        created = self.resolver.add_activity(request.path_params["unit_id"], activity)
        return JSONResponse(_dump(created), status_code=201)

    async def update_activity(self, request: Request) -> Response:
        activity = await _body(request, ActivityInput.model_validate)
        updated = self.resolver.update_activity(request.path_params["unit_id"],
                                                request.path_params["activity_id"], activity)
        return JSONResponse(_dump(updated))

    def routes(self) -> List[Route]:
        return [
            Route("/units", _handle_errors(self.list_units), methods=["GET"]),
            Route("/units", _handle_errors(self.create_unit), methods=["POST"]),
            Route("/units/{unit_id}", _handle_errors(self.get_unit), methods=["GET"]),
            Route("/units/{unit_id}/details", _handle_errors(self.update_details), methods=["PUT"]),
            Route("/units/{unit_id}/criteria", _handle_errors(self.update_criteria), methods=["PUT"]),
            Route("/units/{unit_id}/activities", _handle_errors(self.add_activity), methods=["POST"]),
            Route("/units/{unit_id}/activities/{activity_id}",
                  _handle_errors(self.update_activity), methods=["PUT"]),
        ]


def create_app(resolver: UnitResolver, debug: bool = False,
               lifespan: Optional[Callable[[Starlette], Any]] = None) -> Starlette:
    """
    Build the Starlette application serving ``resolver``.

    Example:
        ```python
        store = MemoryStore()
        app = create_app(UnitResolver(store))
        uvicorn.run(app)
        ```
    """
    routes = UnitRoutes(resolver).routes()
    logger.info(f"Registered {len(routes)} unit routes")
    return Starlette(debug=debug, routes=routes, lifespan=lifespan)
