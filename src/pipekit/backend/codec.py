"""JSON encoding of request bodies and decoding of responses into targets."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from pipekit.core.exceptions import APIError, DecodeError, SerializationError
from pipekit.core.types import JsonDict


def encode_body(body: Any) -> bytes | None:
    """Serialize a request body to compact JSON. ``None`` means no payload.

    NaN and Infinity are rejected for models too; ``model_dump_json`` would
    write them as ``null``.
    """
    if body is None:
        return None
    try:
        if isinstance(body, BaseModel):
            body = body.model_dump(by_alias=True)
        return json.dumps(
            body, separators=(",", ":"), allow_nan=False, default=to_jsonable_python,
        ).encode()
    except (TypeError, ValueError, PydanticSerializationError) as exc:
        raise SerializationError(f"Cannot encode {type(body).__name__} as JSON: {exc}") from exc


def merge_into(target: BaseModel, source: BaseModel) -> None:
    """Copy the fields explicitly set on ``source`` onto ``target`` in place.

    Nested models of the same type are merged recursively; fields absent from
    the source keep their current value on the target.
    """
    for name in source.model_fields_set:
        value = getattr(source, name)
        current = getattr(target, name)
        if isinstance(value, BaseModel) and type(current) is type(value):
            merge_into(current, value)
        else:
            setattr(target, name, value)


def decode_into(target: BaseModel | JsonDict, raw: bytes) -> None:
    """Decode ``raw`` JSON into ``target``, keeping the target's identity."""
    if isinstance(target, dict):
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise DecodeError(f"Response is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
        target.update(data)
        return
    try:
        decoded = type(target).model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"Response is not a valid {type(target).__name__}: {exc}") from exc
    merge_into(target, decoded)


def raise_for_status(status_code: int, method: str = "", url: str = "", body: bytes = b"") -> None:
    """Raise APIError for any status >= 400; everything below is success."""
    if status_code >= 400:
        raise APIError(status_code, method, url, body.decode("utf-8", errors="replace"))
