"""Parse the bundled JSON datasets into VehicleModel catalogs"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List

from drivelens.domain.models import Powertrain, VehicleModel

DATA_DIR = Path(__file__).resolve().parents[2] / "data"
MODELS_FILE = DATA_DIR / "toyota_models.json"
INVENTORY_FILE = DATA_DIR / "toyota_inventory.json"


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def vehicle_from_catalog_entry(entry: Dict[str, Any]) -> VehicleModel:
    """Model-catalog shape: name, type, msrp, mpg|mpge, size, aprBase, leaseResidualPct"""
    name = entry["name"]
    return VehicleModel(
        id=entry.get("id") or slugify(name),
        name=name,
        powertrain=Powertrain.parse(entry["type"]),
        body=entry.get("size", "sedan").lower(),
        msrp=float(entry["msrp"]),
        mpg=_optional_float(entry.get("mpg")),
        mpge=_optional_float(entry.get("mpge")),
        apr_base=float(entry.get("aprBase", 0.06)),
        lease_residual_pct=float(entry.get("leaseResidualPct", 0.58)),
        make=entry.get("make", "Toyota"),
        model=name,
        co2_grams_per_mile=_optional_float(entry.get("co2GramsPerMile")),
    )


def vehicle_from_inventory_entry(entry: Dict[str, Any]) -> VehicleModel:
    """Inventory shape: id, year, make, model, trim, fuelType, mpgCombined, bodyType, ..."""
    powertrain = Powertrain.parse(entry["fuelType"])
    economy = _optional_float(entry.get("mpgCombined"))
    trim = entry.get("trim")
    name = f"{entry['model']} {trim}" if trim else entry["model"]
    return VehicleModel(
        id=entry["id"],
        name=name,
        powertrain=powertrain,
        body=entry["bodyType"].lower(),
        msrp=float(entry["msrp"]),
        mpg=None if powertrain is Powertrain.EV else economy,
        mpge=economy if powertrain is Powertrain.EV else None,
        make=entry.get("make", "Toyota"),
        model=entry["model"],
        year=entry.get("year"),
        trim=trim,
        safety_rating=entry.get("safetyRating"),
        horsepower=entry.get("horsepower"),
        seats=entry.get("seats"),
        maintenance_cost_per_year=_optional_float(entry.get("maintenanceCostPerYear")),
        insurance_cost_per_month=_optional_float(entry.get("insuranceCostPerMonth")),
        resale_value_percent=_optional_float(entry.get("resaleValuePercent")),
    )


def load_model_catalog(path: Path = MODELS_FILE) -> List[VehicleModel]:
    return [vehicle_from_catalog_entry(e) for e in json.loads(path.read_text(encoding="utf-8"))]


def load_inventory(path: Path = INVENTORY_FILE) -> List[VehicleModel]:
    return [vehicle_from_inventory_entry(e) for e in json.loads(path.read_text(encoding="utf-8"))]


def _optional_float(value: Any) -> float | None:
    if value in (None, ""):
        return None
    return float(value)
