"""Unit tests for the NHTSA + fueleconomy.gov client"""

import httpx
import pytest

from drivelens.domain.exceptions import CatalogFetchError
from drivelens.domain.models import Powertrain
from drivelens.infrastructure.clients.vehicle_data import (
    VehicleDataClient,
    body_from_vehicle_class,
    powertrain_from_fuel_type,
)

NHTSA = "https://nhtsa.test/api"
FUELECONOMY = "https://fueleconomy.test/ws/rest"

RECORDS = {
    "1": {"fuelType": "Regular Gasoline", "atvType": "Hybrid", "VClass": "Midsize Cars", "comb08": "57", "co2TailpipeGpm": "155"},
    "2": {"fuelType": "Electricity", "atvType": "EV", "VClass": "Small Sport Utility Vehicle 4WD", "comb08": "104", "co2TailpipeGpm": "0"},
}
MENU = {"Prius": {"menuItem": {"text": "Auto", "value": "1"}}, "bZ4X": {"menuItem": [{"text": "AWD", "value": "2"}]}}


def fake_upstream(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path.endswith("/vehicles/getmodelsformake/Toyota"):
        names = ["Prius", "bZ4X", "Camry", "Corolla"]
        return httpx.Response(200, json={"Results": [{"Model_Name": n} for n in names]})
    if path.endswith("/vehicle/menu/options"):
        model = request.url.params["model"]
        if model == "Corolla":
            return httpx.Response(500)
        return httpx.Response(200, json=MENU.get(model, {"menuItem": None}))
    record_id = path.rsplit("/", 1)[-1]
    return httpx.Response(200, json=RECORDS[record_id])


def make_client(handler) -> VehicleDataClient:
    return VehicleDataClient(
        nhtsa_base=NHTSA,
        fueleconomy_base=FUELECONOMY,
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


async def test_fetch_models_enriches_targets():
    specs = await make_client(fake_upstream).fetch_models("Toyota", 2024)
    by_name = {s.name: s for s in specs}

    # Camry is not a target model
    assert set(by_name) == {"Prius", "bZ4X", "Corolla"}

    prius = by_name["Prius"]
    assert prius.powertrain is Powertrain.HYBRID
    assert prius.body == "sedan"
    assert prius.combined_economy == 57
    assert prius.co2_grams_per_mile == 155

    bz4x = by_name["bZ4X"]
    assert bz4x.powertrain is Powertrain.EV
    assert bz4x.body == "suv"
    assert bz4x.co2_grams_per_mile is None


async def test_failed_detail_lookup_keeps_model_with_unknown_specs():
    specs = await make_client(fake_upstream).fetch_models("Toyota", 2024)
    corolla = next(s for s in specs if s.name == "Corolla")

    assert corolla.powertrain is None
    assert corolla.combined_economy is None


async def test_model_list_error_raises():
    client = make_client(lambda request: httpx.Response(503))
    with pytest.raises(CatalogFetchError):
        await client.fetch_models("Toyota", 2024)


async def test_model_list_timeout_raises():
    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(CatalogFetchError, match="timeout"):
        await make_client(timeout).fetch_models("Toyota", 2024)


async def test_malformed_model_list_raises():
    client = make_client(lambda request: httpx.Response(200, json=["not", "an", "object"]))
    with pytest.raises(CatalogFetchError):
        await client.fetch_models("Toyota", 2024)


def test_body_from_vehicle_class():
    assert body_from_vehicle_class("Small Sport Utility Vehicle 2WD") == "suv"
    assert body_from_vehicle_class("Compact Cars") == "compact"
    assert body_from_vehicle_class("Large Cars") == "sedan"
    assert body_from_vehicle_class("Standard Pickup Trucks 4WD") == "truck"
    assert body_from_vehicle_class("Minivan - 2WD") is None
    assert body_from_vehicle_class(None) is None


def test_powertrain_from_fuel_type():
    assert powertrain_from_fuel_type("Electricity") is Powertrain.EV
    assert powertrain_from_fuel_type("Regular Gasoline") is Powertrain.GAS
    assert powertrain_from_fuel_type("") is None
