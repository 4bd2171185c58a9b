"""Pytest fixtures for testing"""

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from drivelens.api.dependencies import get_catalog_provider, get_narration_client
from drivelens.api.main import create_app
from drivelens.domain.models import Powertrain, UserProfile, VehicleModel
from drivelens.infrastructure.catalog.cache import TTLCache
from drivelens.infrastructure.catalog.loader import load_inventory, load_model_catalog
from drivelens.infrastructure.catalog.provider import CatalogProvider
from drivelens.infrastructure.clients.narration import NarrationClient


@pytest.fixture
def make_profile() -> Callable[..., UserProfile]:
    """Build a mid-income, good-credit profile with optional overrides"""

    def _make(**overrides) -> UserProfile:
        fields = {
            "monthly_income": 6000,
            "credit_score": 720,
            "monthly_budget": 450,
            "daily_miles": 30,
        }
        fields.update(overrides)
        return UserProfile(**fields)

    return _make


@pytest.fixture
def make_vehicle() -> Callable[..., VehicleModel]:
    def _make(**overrides) -> VehicleModel:
        fields = {
            "id": "test-sedan",
            "name": "Test Sedan",
            "powertrain": Powertrain.GAS,
            "body": "sedan",
            "msrp": 30000,
            "mpg": 32,
            "model": "Test Sedan",
            "year": 2024,
        }
        fields.update(overrides)
        return VehicleModel(**fields)

    return _make


@pytest.fixture
def model_catalog() -> list[VehicleModel]:
    """Bundled simple model catalog"""
    return load_model_catalog()


@pytest.fixture
def inventory() -> list[VehicleModel]:
    """Bundled rich inventory"""
    return load_inventory()


@pytest.fixture
def catalog_provider() -> CatalogProvider:
    """Local-only provider, no remote enrichment"""
    return CatalogProvider(cache=TTLCache(ttl_seconds=60), client=None)


@pytest.fixture
def client(catalog_provider: CatalogProvider) -> TestClient:
    """Create FastAPI test client with local catalog and offline narration"""
    app = create_app()
    app.dependency_overrides[get_catalog_provider] = lambda: catalog_provider
    app.dependency_overrides[get_narration_client] = lambda: NarrationClient(api_key="")
    return TestClient(app)
