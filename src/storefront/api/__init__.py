"""Storefront API client package."""

from storefront.api.endpoints import StorefrontApi
from storefront.api.transport import ApiClient, ApiError

__all__ = ["ApiClient", "ApiError", "StorefrontApi"]
