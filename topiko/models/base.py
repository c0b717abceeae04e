"""Shared model configuration."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(UTC)


class FrozenModel(BaseModel):
    """Immutable model serialized with camelCase keys for the front-end.

    Accepts both snake_case and camelCase on input.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
