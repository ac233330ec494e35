"""Shared helpers for Bifrost endpoint modules.

It is internal to pybifrost and may change at any time.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pybifrost.exceptions import BifrostApiError

TModel = TypeVar("TModel", bound=BaseModel)


def parse_model(endpoint: str, data: Any, model: type[TModel]) -> TModel:
    """Validate a decoded JSON body against *model*.

    Validation failures are reported as :class:`BifrostApiError` so callers
    only ever see the pybifrost hierarchy.
    """
    if not isinstance(data, dict):
        raise BifrostApiError(
            f"{endpoint} returned {type(data).__name__}, expected an object",
            endpoint=endpoint,
        )
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise BifrostApiError(f"{endpoint} returned an invalid payload: {exc}", endpoint=endpoint) from exc


def parse_optional_model(endpoint: str, data: Any, model: type[TModel]) -> TModel | None:
    """Like :func:`parse_model` but tolerate empty acknowledgement bodies."""
    if data is None or data == {}:
        return None
    return parse_model(endpoint, data, model)
