from __future__ import annotations

from typing import Any

from pydantic import ConfigDict

from kiro_proxy.core.interfaces.model_bases import DomainModel


class ValueObject(DomainModel):
    """Base class for value objects.

    Value objects are immutable and compared by their values,
    not their identities.
    """

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert this value object to a dictionary."""
        return self.model_dump()
