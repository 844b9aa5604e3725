"""
Fact list router.

POST   /fact       — Create a fact (ID assigned by the store)
GET    /fact       — List every fact in insertion order
DELETE /fact/{id}  — Remove a fact
PUT    /fact/{id}  — Replace a fact, creating it when the ID is unknown

The path ID is parsed before the body is read, so a request with both a bad
ID and a bad body reports the ID.
"""
from __future__ import annotations

import re
from typing import Callable, TypeVar

from fastapi import APIRouter, Depends, Path, Request, Response, status
from pydantic import BaseModel, ValidationError

from app.core.errors import (
    InvalidRequestBodyError,
    JSONUTF8Response,
    NonNumericFactIDError,
    describe_errors,
)
from app.core.request_logging import LoggingRoute
from app.schemas.common import ErrorResponse
from app.schemas.fact import CreateFactRequest, FactResponse, UpdateFactRequest
from app.services.factlist import Service

router = APIRouter(
    prefix="/fact",
    tags=["facts"],
    route_class=LoggingRoute,
    default_response_class=JSONUTF8Response,
)

INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")

ModelT = TypeVar("ModelT", bound=BaseModel)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

def get_service(request: Request) -> Service:
    return request.app.state.fact_service


def fact_id_path(id: str = Path(description="Numeric fact ID.")) -> int:
    if not _DECIMAL_RE.fullmatch(id):
        raise NonNumericFactIDError(id)
    fact_id = int(id)
    if not INT64_MIN <= fact_id <= INT64_MAX:
        raise NonNumericFactIDError(id)
    return fact_id


def json_body(model: type[ModelT]) -> Callable:
    """Dependency decoding the raw request body into `model`.

    Any decode or validation failure becomes InvalidRequestBodyError.
    """
    async def decode(request: Request) -> ModelT:
        raw = await request.body()
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            raise InvalidRequestBodyError(
                describe_errors(exc.errors(include_url=False, include_input=False))
            ) from None

    return decode


def body_openapi(model: type[BaseModel]) -> dict:
    """`openapi_extra` publishing `model` as the JSON request body."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema(by_alias=True)}},
        }
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Malformed body or non-numeric ID."},
    500: {"model": ErrorResponse, "description": "Storage failure."},
}


@router.post(
    "",
    response_model=FactResponse,
    summary="Create a fact",
    responses=_ERRORS,
    openapi_extra=body_openapi(CreateFactRequest),
)
def save_fact(
    payload: CreateFactRequest = Depends(json_body(CreateFactRequest)),
    service: Service = Depends(get_service),
):
    """Store a new question/answer pair and return it with its assigned ID."""
    fact = service.save(payload.to_fact())
    return FactResponse.from_fact(fact)


@router.get(
    "",
    response_model=list[FactResponse],
    summary="List all facts",
)
def list_facts(service: Service = Depends(get_service)):
    """Return every stored fact in insertion order; `[]` when there are none."""
    return [FactResponse.from_fact(f) for f in service.list()]


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove a fact",
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "Fact not found."}},
)
def remove_fact(
    fact_id: int = Depends(fact_id_path),
    service: Service = Depends(get_service),
):
    service.remove(fact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{id}",
    response_model=FactResponse,
    summary="Replace a fact, or create it under the given ID",
    responses={
        **_ERRORS,
        200: {"description": "Existing fact replaced."},
        201: {"description": "No fact had this ID; it was created."},
    },
    openapi_extra=body_openapi(UpdateFactRequest),
)
def update_fact(
    response: Response,
    fact_id: int = Depends(fact_id_path),
    payload: UpdateFactRequest = Depends(json_body(UpdateFactRequest)),
    service: Service = Depends(get_service),
):
    """
    Replace every field of the fact with the path ID. Fields are not merged:
    `createdAt` comes from the request (zero time when omitted).

    Any `id` in the body is ignored.
    """
    fact, created = service.update(payload.to_fact(fact_id))
    if created:
        response.status_code = status.HTTP_201_CREATED
    return FactResponse.from_fact(fact)
