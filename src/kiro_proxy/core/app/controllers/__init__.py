"""HTTP controllers and their routers."""

from .anthropic_controller import router as anthropic_router
from .chat_controller import router as chat_router
from .models_controller import router as models_router

__all__ = ["anthropic_router", "chat_router", "models_router"]
