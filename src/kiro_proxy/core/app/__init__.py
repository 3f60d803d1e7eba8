from kiro_proxy.core.app.application_factory import build_app

__all__ = ["build_app"]
