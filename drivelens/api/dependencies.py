"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from fastapi import Request

from drivelens.config import settings
from drivelens.infrastructure.catalog.cache import TTLCache
from drivelens.infrastructure.catalog.provider import CatalogProvider
from drivelens.infrastructure.clients.narration import NarrationClient
from drivelens.infrastructure.clients.vehicle_data import VehicleDataClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache
def get_catalog_provider() -> CatalogProvider:
    """One provider per process so its TTL cache is shared across requests"""
    client = VehicleDataClient() if settings.remote_catalog_enabled else None
    return CatalogProvider(
        cache=TTLCache(settings.catalog_cache_ttl_seconds),
        client=client,
        make=settings.catalog_make,
        year=settings.catalog_year,
    )


def get_narration_client() -> NarrationClient:
    """Provide narration client instance"""
    return NarrationClient()
