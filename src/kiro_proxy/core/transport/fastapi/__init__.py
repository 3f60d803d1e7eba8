from .exception_adapters import (
    domain_exception_to_response,
    register_exception_handlers,
)
from .response_adapters import domain_response_to_fastapi

__all__ = [
    "domain_exception_to_response",
    "domain_response_to_fastapi",
    "register_exception_handlers",
]
