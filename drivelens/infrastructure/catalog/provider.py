"""Catalog provider: local datasets, optional live enrichment, TTL caching"""

import logging
from dataclasses import replace
from typing import Callable, List, Sequence

from drivelens.domain.exceptions import CatalogFetchError, VehicleNotFoundError
from drivelens.domain.models import Powertrain, VehicleModel
from drivelens.infrastructure.catalog.cache import TTLCache
from drivelens.infrastructure.catalog.loader import load_inventory, load_model_catalog
from drivelens.infrastructure.clients.vehicle_data import RemoteModelSpec, VehicleDataClient
from drivelens.infrastructure.observability.metrics import (
    catalog_cache_hits_counter,
    catalog_fetch_failures_counter,
)

logger = logging.getLogger(__name__)

MODELS_KEY = "models"
INVENTORY_KEY = "inventory"


def merge_remote_specs(local: Sequence[VehicleModel], remote: Sequence[RemoteModelSpec]) -> List[VehicleModel]:
    """
    Overlay live specs on the local entries with the same name.

    Pricing, APR and residual always come from the local dataset, so remote
    models with no local counterpart are dropped.
    """
    by_name = {v.name.lower(): v for v in local}
    merged: List[VehicleModel] = []
    for spec in remote:
        base = by_name.get(spec.name.lower())
        if base is None:
            continue
        powertrain = spec.powertrain or base.powertrain
        mpg, mpge = base.mpg, base.mpge
        if spec.combined_economy is not None:
            if powertrain is Powertrain.EV:
                mpg, mpge = None, spec.combined_economy
            else:
                mpg, mpge = spec.combined_economy, None
        merged.append(
            replace(
                base,
                powertrain=powertrain,
                body=spec.body or base.body,
                mpg=mpg,
                mpge=mpge,
                co2_grams_per_mile=spec.co2_grams_per_mile or base.co2_grams_per_mile,
            )
        )
    return merged


class CatalogProvider:
    """Serves the model catalog and the inventory, read-only, through a TTL cache"""

    def __init__(
        self,
        cache: TTLCache,
        client: VehicleDataClient | None = None,
        make: str = "Toyota",
        year: int = 2024,
        models_loader: Callable[[], List[VehicleModel]] = load_model_catalog,
        inventory_loader: Callable[[], List[VehicleModel]] = load_inventory,
    ):
        self.cache = cache
        self.client = client
        self.make = make
        self.year = year
        self._models_loader = models_loader
        self._inventory_loader = inventory_loader

    async def models(self) -> List[VehicleModel]:
        """
        Model catalog, enriched from the live APIs when a client is configured.

        Any upstream failure falls back to the local dataset; the result is
        cached either way.
        """
        cached = self.cache.get(MODELS_KEY)
        if cached is not None:
            catalog_cache_hits_counter.inc()
            return cached

        local = self._models_loader()
        result = local
        if self.client is not None:
            try:
                remote = await self.client.fetch_models(self.make, self.year)
                merged = merge_remote_specs(local, remote)
                if merged:
                    result = merged
            except CatalogFetchError as e:
                catalog_fetch_failures_counter.inc()
                logger.warning("Remote catalog unavailable, using local dataset", extra={"error": str(e)})

        self.cache.set(MODELS_KEY, result)
        return result

    def inventory(self) -> List[VehicleModel]:
        cached = self.cache.get(INVENTORY_KEY)
        if cached is not None:
            catalog_cache_hits_counter.inc()
            return cached
        inventory = self._inventory_loader()
        self.cache.set(INVENTORY_KEY, inventory)
        return inventory

    async def find_model(self, name: str) -> VehicleModel:
        """Case-insensitive lookup by model name"""
        for vehicle in await self.models():
            if vehicle.name.lower() == name.lower():
                return vehicle
        raise VehicleNotFoundError(name)

    def find_vehicle(self, vehicle_id: str) -> VehicleModel:
        for vehicle in self.inventory():
            if vehicle.id == vehicle_id:
                return vehicle
        raise VehicleNotFoundError(vehicle_id)

    def invalidate(self) -> None:
        self.cache.invalidate()
