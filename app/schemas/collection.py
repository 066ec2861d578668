"""
Decoding of request bodies that may carry one entity or a list of entities.

Clients post either ``{...}`` or ``[{...}, {...}]`` to the bulk endpoints.
Both shapes become a plain list so the data-access layer only ever sees lists.
"""
from typing import Callable, List, Type, TypeVar, Union
from fastapi import HTTPException, Request, status
from pydantic import BaseModel, TypeAdapter, ValidationError

from app.utils.logger import get_logger

logger = get_logger("api.collection")

ModelType = TypeVar("ModelType", bound=BaseModel)

ARRAY = "ARRAY"
OBJECT = "OBJECT"
OTHER = "OTHER"

_WHITESPACE = b" \t\r\n"


def json_type(raw: Union[bytes, str]) -> str:
    """Classify a JSON payload by its first significant character"""
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    stripped = raw.lstrip(_WHITESPACE)
    if stripped.startswith(b"["):
        return ARRAY
    if stripped.startswith(b"{"):
        return OBJECT
    return OTHER


def decode_collection(raw: Union[bytes, str], model: Type[ModelType]) -> List[ModelType]:
    """
    Decode raw JSON into a list of ``model``.

    An array decodes item by item in input order, an object becomes a
    one-element list and anything else (empty body, null, a scalar) yields
    an empty list. Content that does not validate raises ValidationError.
    """
    kind = json_type(raw)
    if kind == ARRAY:
        return TypeAdapter(List[model]).validate_json(raw)
    if kind == OBJECT:
        return [model.model_validate_json(raw)]
    return []


def collection_body(model: Type[ModelType]) -> Callable:
    """
    FastAPI dependency reading the request body as a collection of ``model``
    """
    async def dependency(request: Request) -> List[ModelType]:
        raw = await request.body()
        try:
            return decode_collection(raw, model)
        except ValidationError as e:
            logger.warning(f"Malformed {model.__name__} payload on {request.url.path}: {e.error_count()} error(s)")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=e.errors(include_url=False, include_context=False, include_input=False),
            )

    return dependency
