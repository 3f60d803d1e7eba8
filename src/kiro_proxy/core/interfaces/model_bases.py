"""Nominal marker base classes for model standardization.

`DomainModel` marks Pydantic-based domain/API models and `InternalDTO`
marks internal dataclass-based DTOs.
"""

from __future__ import annotations

from pydantic import BaseModel


class DomainModel(BaseModel):
    """Nominal marker for Pydantic-based domain and API models."""

    def __repr__(self) -> str:
        class_name = self.__class__.__name__

        for attr in ("id", "model"):
            attr_value = getattr(self, attr, None)
            if attr_value:
                return f'<{class_name} {attr}="{attr_value}">'

        return f"<{class_name}>"


class InternalDTO:
    """Nominal marker for internal dataclass DTOs."""
