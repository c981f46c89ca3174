"""Identity domain API package."""

from identity.api.routes import addresses_router, users_router

__all__ = ["users_router", "addresses_router"]
