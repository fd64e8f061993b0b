"""API routes package."""

from registry.routes.descriptor_routes import router as descriptor_router

__all__ = ["descriptor_router"]
