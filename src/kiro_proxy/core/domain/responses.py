from dataclasses import dataclass
from typing import Any

from kiro_proxy.core.interfaces.model_bases import InternalDTO


@dataclass
class ResponseEnvelope(InternalDTO):
    """Transport-agnostic response container.

    Decouples connectors from FastAPI/Starlette responses; the transport
    adapters map it to the concrete response type.
    """

    content: Any  # dict, string or bytes
    headers: dict[str, str] | None = None
    status_code: int = 200
    media_type: str = "application/json"

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400
