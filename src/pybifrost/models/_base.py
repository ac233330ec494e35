"""Base model for Bifrost API payloads.

Every response model inherits from :class:`BifrostBaseModel` which
provides:

* frozen instances, so a parsed snapshot can be shared between readers
  without anyone mutating it in place;
* ``extra="ignore"`` so newer bridge versions can add fields freely;
* a ``model_validator(mode="before")`` that drops explicit ``null``
  values so the field default is used instead.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class BifrostBaseModel(BaseModel):
    """Base for Bifrost API models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Drop ``None`` values so defaults apply."""
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}
