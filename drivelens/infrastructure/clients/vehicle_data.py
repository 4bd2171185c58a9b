"""NHTSA vPIC + fueleconomy.gov client for live model specs"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from drivelens.config import settings
from drivelens.domain.exceptions import CatalogFetchError
from drivelens.domain.models import Powertrain

logger = logging.getLogger(__name__)

# Models we can enrich reliably through fueleconomy.gov
TARGET_MODELS = ("Corolla", "Corolla Hybrid", "Prius", "RAV4", "RAV4 Hybrid", "bZ4X")

ATV_POWERTRAINS = {"Hybrid": Powertrain.HYBRID, "Plug-in Hybrid": Powertrain.HYBRID, "EV": Powertrain.EV}


@dataclass
class RemoteModelSpec:
    """Subset of a fueleconomy.gov vehicle record; None means unknown"""

    name: str
    powertrain: Optional[Powertrain] = None
    body: Optional[str] = None
    combined_economy: Optional[float] = None
    co2_grams_per_mile: Optional[float] = None
    fuel_type: Optional[str] = None


def body_from_vehicle_class(vehicle_class: str | None) -> str | None:
    if not vehicle_class:
        return None
    cls = vehicle_class.lower()
    if "suv" in cls or "sport utility" in cls:
        return "suv"
    if "compact" in cls:
        return "compact"
    if any(k in cls for k in ("midsize", "mid-size", "large", "sedan")):
        return "sedan"
    if "truck" in cls or "pickup" in cls:
        return "truck"
    return None


def powertrain_from_fuel_type(fuel_type: str | None) -> Powertrain | None:
    if not fuel_type:
        return None
    ft = fuel_type.lower()
    if "electric" in ft:
        return Powertrain.EV
    if "hybrid" in ft:
        return Powertrain.HYBRID
    return Powertrain.GAS


class VehicleDataClient:
    """Client for the public vehicle data APIs"""

    def __init__(
        self,
        nhtsa_base: str | None = None,
        fueleconomy_base: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.nhtsa_base = nhtsa_base or settings.nhtsa_api_base
        self.fueleconomy_base = fueleconomy_base or settings.fueleconomy_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def fetch_models(self, make: str, year: int) -> List[RemoteModelSpec]:
        """
        List the target models for a make and enrich each from fueleconomy.gov.

        A model whose fueleconomy lookup fails is still returned, with unknown
        specs.

        Raises:
            CatalogFetchError: On timeout, HTTP errors, or an invalid model list
        """
        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={"accept": "application/json"},
        ) as client:
            try:
                response = await client.get(
                    f"{self.nhtsa_base}/vehicles/getmodelsformake/{make}",
                    params={"format": "json"},
                )
                response.raise_for_status()
                names = [r["Model_Name"] for r in response.json().get("Results", []) if r.get("Model_Name")]
            except httpx.TimeoutException as e:
                raise CatalogFetchError(f"NHTSA timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise CatalogFetchError(f"NHTSA error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise CatalogFetchError(f"NHTSA request failed: {e}") from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise CatalogFetchError(f"Invalid model list from NHTSA: {e}") from e

            selected = [n for n in names if any(t.lower() in n.lower() for t in TARGET_MODELS)]
            specs = []
            for name in selected:
                specs.append(await self._fetch_spec(client, make, year, name))
            return specs

    async def _fetch_spec(self, client: httpx.AsyncClient, make: str, year: int, name: str) -> RemoteModelSpec:
        try:
            menu = await client.get(
                f"{self.fueleconomy_base}/vehicle/menu/options",
                params={"year": year, "make": make, "model": name},
            )
            menu.raise_for_status()
            items = menu.json().get("menuItem") or []
            if isinstance(items, dict):
                items = [items]
            if not items:
                return RemoteModelSpec(name=name)

            detail = await client.get(f"{self.fueleconomy_base}/vehicle/{items[0]['value']}")
            detail.raise_for_status()
            return _spec_from_record(name, detail.json())
        except (httpx.HTTPError, KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning("fueleconomy lookup failed", extra={"model": name, "error": str(e)})
            return RemoteModelSpec(name=name)


def _spec_from_record(name: str, record: Dict[str, Any]) -> RemoteModelSpec:
    fuel_type = record.get("fuelType")
    # atvType ("Hybrid", "EV") is more specific than the fuel grade
    powertrain = ATV_POWERTRAINS.get(record.get("atvType") or "") or powertrain_from_fuel_type(fuel_type)
    return RemoteModelSpec(
        name=name,
        powertrain=powertrain,
        body=body_from_vehicle_class(record.get("VClass")),
        combined_economy=_number(record.get("comb08")),
        co2_grams_per_mile=_number(record.get("co2TailpipeGpm")),
        fuel_type=fuel_type,
    )


def _number(value: Any) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None
