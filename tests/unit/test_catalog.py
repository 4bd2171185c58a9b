"""Unit tests for catalog loading, caching and the provider"""

import pytest

from drivelens.domain.exceptions import CatalogFetchError, VehicleNotFoundError
from drivelens.domain.models import Powertrain
from drivelens.infrastructure.catalog.cache import TTLCache
from drivelens.infrastructure.catalog.loader import (
    slugify,
    vehicle_from_catalog_entry,
    vehicle_from_inventory_entry,
)
from drivelens.infrastructure.catalog.provider import CatalogProvider, merge_remote_specs
from drivelens.infrastructure.clients.vehicle_data import RemoteModelSpec


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class FakeVehicleDataClient:
    """Stands in for VehicleDataClient; counts calls"""

    def __init__(self, specs=None, error: Exception | None = None):
        self.specs = specs or []
        self.error = error
        self.calls = 0

    async def fetch_models(self, make, year):
        self.calls += 1
        if self.error:
            raise self.error
        return self.specs


def test_catalog_entry_shape():
    vehicle = vehicle_from_catalog_entry(
        {"name": "RAV4 Hybrid", "type": "Hybrid", "msrp": 32350, "mpg": 40, "size": "SUV", "aprBase": 0.062}
    )

    assert vehicle.id == "rav4-hybrid"
    assert vehicle.powertrain is Powertrain.HYBRID
    assert vehicle.body == "suv"
    assert vehicle.apr_base == 0.062
    assert vehicle.lease_residual_pct == 0.58
    assert vehicle.model_family == "RAV4 Hybrid"


def test_inventory_entry_shape():
    vehicle = vehicle_from_inventory_entry(
        {
            "id": "bz4x-xle-2024",
            "year": 2024,
            "make": "Toyota",
            "model": "bZ4X",
            "trim": "XLE",
            "msrp": 43070,
            "fuelType": "electric",
            "mpgCombined": 119,
            "bodyType": "SUV",
            "seats": 5,
            "safetyRating": 5,
        }
    )

    assert vehicle.name == "bZ4X XLE"
    assert vehicle.powertrain is Powertrain.EV
    assert vehicle.mpg is None
    assert vehicle.mpge == 119
    assert vehicle.display_name == "2024 Toyota bZ4X"


def test_bundled_datasets(model_catalog, inventory):
    assert len(model_catalog) == 10
    bz4x = next(v for v in model_catalog if v.name == "bZ4X")
    assert bz4x.powertrain is Powertrain.EV
    assert bz4x.mpge == 119

    ids = [v.id for v in inventory]
    assert len(ids) == len(set(ids))
    assert all(v.msrp > 0 for v in inventory)


def test_slugify():
    assert slugify("Corolla Cross L") == "corolla-cross-l"


def test_ttl_cache_expiry():
    clock = FakeClock()
    cache = TTLCache(ttl_seconds=10, clock=clock)
    cache.set("models", [1])

    clock.now = 9.9
    assert cache.get("models") == [1]
    assert "models" in cache

    clock.now = 10.0
    assert cache.get("models") is None


def test_ttl_cache_expiry_tolerates_concurrent_removal():
    """Another reader may drop an expired entry between lookup and removal"""
    cache = TTLCache(ttl_seconds=10, clock=lambda: 0.0)
    cache.set("models", [1])

    def clock() -> float:
        cache.invalidate("models")
        return 20.0

    cache._clock = clock
    assert cache.get("models") is None
    assert cache.get("models") is None


def test_ttl_cache_invalidate():
    cache = TTLCache(ttl_seconds=10)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.invalidate("a")
    assert "a" not in cache
    assert cache.get("b") == 2

    cache.invalidate()
    assert cache.get("b") is None


def test_merge_keeps_local_pricing_and_drops_unknown(model_catalog):
    specs = [
        RemoteModelSpec(name="prius", powertrain=Powertrain.HYBRID, body="compact", combined_economy=56),
        RemoteModelSpec(name="Supra"),
    ]
    merged = merge_remote_specs(model_catalog, specs)

    assert len(merged) == 1
    prius = merged[0]
    assert prius.name == "Prius"
    assert prius.msrp == 28350
    assert prius.mpg == 56
    assert prius.body == "compact"


def test_merge_ev_economy_goes_to_mpge(model_catalog):
    merged = merge_remote_specs(model_catalog, [RemoteModelSpec(name="bZ4X", powertrain=Powertrain.EV, combined_economy=104)])
    assert merged[0].mpge == 104
    assert merged[0].mpg is None


def test_merge_keeps_local_values_when_unknown(model_catalog):
    merged = merge_remote_specs(model_catalog, [RemoteModelSpec(name="Corolla")])
    original = next(v for v in model_catalog if v.name == "Corolla")
    assert merged[0] == original


async def test_provider_enriches_and_caches():
    client = FakeVehicleDataClient(specs=[RemoteModelSpec(name="Prius", combined_economy=56)])
    provider = CatalogProvider(cache=TTLCache(ttl_seconds=60), client=client)

    first = await provider.models()
    second = await provider.models()

    assert [v.name for v in first] == ["Prius"]
    assert second is first
    assert client.calls == 1


async def test_provider_falls_back_to_local_on_fetch_error(model_catalog):
    client = FakeVehicleDataClient(error=CatalogFetchError("NHTSA timeout"))
    provider = CatalogProvider(cache=TTLCache(ttl_seconds=60), client=client)

    models = await provider.models()

    assert [v.name for v in models] == [v.name for v in model_catalog]


async def test_provider_falls_back_when_nothing_matches(model_catalog):
    client = FakeVehicleDataClient(specs=[RemoteModelSpec(name="Supra")])
    provider = CatalogProvider(cache=TTLCache(ttl_seconds=60), client=client)

    assert len(await provider.models()) == len(model_catalog)


async def test_provider_refetches_after_invalidate():
    client = FakeVehicleDataClient(specs=[RemoteModelSpec(name="Prius")])
    provider = CatalogProvider(cache=TTLCache(ttl_seconds=60), client=client)

    await provider.models()
    provider.invalidate()
    await provider.models()

    assert client.calls == 2


async def test_find_model_is_case_insensitive(catalog_provider):
    vehicle = await catalog_provider.find_model("rav4 hybrid")
    assert vehicle.name == "RAV4 Hybrid"

    with pytest.raises(VehicleNotFoundError):
        await catalog_provider.find_model("Supra")


def test_find_vehicle(catalog_provider):
    assert catalog_provider.find_vehicle("prius-le-2024").model_family == "Prius"
    with pytest.raises(VehicleNotFoundError):
        catalog_provider.find_vehicle("supra-gr-2024")
