from .main import app, build_app, ctx_store

__all__ = ["app", "build_app", "ctx_store"]
