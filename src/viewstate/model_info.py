"""Model type metadata and date rendering mode for a render pass."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from types import NoneType, SimpleNamespace
from typing import Any

# Model types that carry no static shape; templates treat them as dynamic.
_DYNAMIC_TYPES: frozenset[type] = frozenset({object, dict, SimpleNamespace, NoneType})


@dataclass(frozen=True, slots=True)
class ModelTypeInfo:
    """Describes the type of the model bound to a template.

    Attributes:
        type: Type the template sees (``object`` for dynamic models)
        original_type: Type of the model as supplied
        is_strong_type: False when the model has no static shape
        template_type_name: Qualified type name, or ``"dynamic"``
    """

    type: type
    original_type: type
    is_strong_type: bool
    template_type_name: str

    @classmethod
    def from_type(cls, model_type: type) -> ModelTypeInfo:
        if model_type in _DYNAMIC_TYPES:
            return cls(
                type=object,
                original_type=model_type,
                is_strong_type=False,
                template_type_name="dynamic",
            )
        return cls(
            type=model_type,
            original_type=model_type,
            is_strong_type=True,
            template_type_name=f"{model_type.__module__}.{model_type.__qualname__}",
        )

    @classmethod
    def for_model(cls, model: Any) -> ModelTypeInfo:
        """Build type info from a model instance (``None`` is dynamic)."""
        return cls.from_type(type(model))


class DateRenderingMode(Enum):
    """How date helpers format date and time values.

    RFC3339 is what ``<input type="date">`` and friends expect; the
    culture mode is for display text.
    """

    RFC3339 = "rfc3339"
    CURRENT_CULTURE = "current_culture"

    def format(self, value: dt.date | dt.time) -> str:
        """Format a date, datetime or time according to this mode."""
        if self is DateRenderingMode.RFC3339:
            if isinstance(value, dt.datetime | dt.time):
                return value.isoformat(timespec="milliseconds")
            return value.isoformat()

        # Locale-dependent representation (%x date, %X time)
        if isinstance(value, dt.datetime):
            return value.strftime("%x %X")
        if isinstance(value, dt.time):
            return value.strftime("%X")
        return value.strftime("%x")
