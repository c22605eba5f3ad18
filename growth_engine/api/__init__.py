from .engine_routes import router

__all__ = ["router"]
