"""
Static calibration tables: crop coefficients (Kc) and soil profiles.

Both tables are keyed by a normalised name (trimmed, lowercased). French names
used by the field app are accepted as aliases of the English keys. The tables
are read-only once built; pass overrides to the constructor to calibrate.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .config import ENGINE
from .inputs import GrowthStage, SoilInput

log = logging.getLogger(__name__)

DEFAULT_KC = ENGINE.default_kc

_S = GrowthStage

# Kc per growth stage (initial, development, flowering, maturity)
CROP_KC: Dict[str, Dict[GrowthStage, float]] = {
    "tomato":   {_S.INITIAL: 0.60, _S.DEVELOPMENT: 0.80, _S.FLOWERING: 1.15, _S.MATURITY: 0.80},
    "corn":     {_S.INITIAL: 0.30, _S.DEVELOPMENT: 0.70, _S.FLOWERING: 1.20, _S.MATURITY: 0.60},
    "lettuce":  {_S.INITIAL: 0.70, _S.DEVELOPMENT: 0.85, _S.FLOWERING: 1.00, _S.MATURITY: 0.95},
    "onion":    {_S.INITIAL: 0.70, _S.DEVELOPMENT: 0.85, _S.FLOWERING: 1.05, _S.MATURITY: 0.75},
    "pepper":   {_S.INITIAL: 0.60, _S.DEVELOPMENT: 0.80, _S.FLOWERING: 1.05, _S.MATURITY: 0.90},
    "eggplant": {_S.INITIAL: 0.60, _S.DEVELOPMENT: 0.80, _S.FLOWERING: 1.05, _S.MATURITY: 0.90},
    "carrot":   {_S.INITIAL: 0.70, _S.DEVELOPMENT: 0.85, _S.FLOWERING: 1.05, _S.MATURITY: 0.95},
    "bean":     {_S.INITIAL: 0.50, _S.DEVELOPMENT: 0.75, _S.FLOWERING: 1.05, _S.MATURITY: 0.90},
    "rice":     {_S.INITIAL: 1.05, _S.DEVELOPMENT: 1.10, _S.FLOWERING: 1.20, _S.MATURITY: 0.90},
}

CROP_ALIASES = {
    "tomate": "tomato",
    "maïs": "corn",
    "mais": "corn",
    "maize": "corn",
    "laitue": "lettuce",
    "oignon": "onion",
    "poivron": "pepper",
    "aubergine": "eggplant",
    "carotte": "carrot",
    "haricot": "bean",
    "riz": "rice",
}


@dataclass(frozen=True)
class SoilProfile:
    retention_capacity: float  # mm/m
    interval_days: int


DEFAULT_SOIL_PROFILE = SoilProfile(retention_capacity=60.0, interval_days=3)

SOIL_PROFILES: Dict[str, SoilProfile] = {
    "sandy":        SoilProfile(40.0, 2),
    "loam":         SoilProfile(120.0, 3),
    "clay":         SoilProfile(150.0, 4),
    "ferrallitic":  SoilProfile(100.0, 3),
    "hydromorphic": SoilProfile(160.0, 5),
    "alluvial":     SoilProfile(120.0, 3),
}

SOIL_ALIASES = {
    "sablonneux": "sandy",
    "sand": "sandy",
    "limoneux": "loam",
    "argileux": "clay",
    "ferrallitique": "ferrallitic",
    "hydromorphe": "hydromorphic",
}


def normalize_name(name: str) -> str:
    """Canonical table key for a free-text crop or soil name."""
    return name.strip().lower()


class CropCoefficientTable:
    """(crop, growth stage) -> Kc, with a single documented fallback."""

    def __init__(self, table: Optional[Mapping[str, Mapping[GrowthStage, float]]] = None,
                 aliases: Optional[Mapping[str, str]] = None,
                 default_kc: float = DEFAULT_KC):
        source = CROP_KC if table is None else table
        self._table = MappingProxyType({
            normalize_name(crop): MappingProxyType(dict(stages)) for crop, stages in source.items()
        })
        self._aliases = MappingProxyType({
            normalize_name(k): normalize_name(v) for k, v in (CROP_ALIASES if aliases is None else aliases).items()
        })
        self.default_kc = default_kc

    def with_overrides(self, overrides: Mapping[str, Mapping[GrowthStage, float]]) -> "CropCoefficientTable":
        """New table where each overridden crop's stages replace or extend the current ones."""
        merged = {crop: dict(stages) for crop, stages in self._table.items()}
        for crop, stages in overrides.items():
            merged.setdefault(self._key(crop), {}).update(stages)
        return CropCoefficientTable(merged, self._aliases, self.default_kc)

    def _key(self, crop_name: str) -> str:
        key = normalize_name(crop_name)
        return self._aliases.get(key, key)

    def crops(self):
        return sorted(self._table)

    def is_known(self, crop_name: str, stage: GrowthStage) -> bool:
        return stage in self._table.get(self._key(crop_name), {})

    def lookup(self, crop_name: str, stage: GrowthStage) -> float:
        stages = self._table.get(self._key(crop_name))
        if stages is None or stage not in stages:
            log.warning(f"No Kc for crop '{crop_name}' at stage {stage.value}; using default {self.default_kc}")
            return self.default_kc
        return stages[stage]


class SoilProfileTable:
    """Soil name -> retention capacity and irrigation interval."""

    def __init__(self, table: Optional[Mapping[str, SoilProfile]] = None,
                 aliases: Optional[Mapping[str, str]] = None,
                 default: SoilProfile = DEFAULT_SOIL_PROFILE):
        source = SOIL_PROFILES if table is None else table
        self._table = MappingProxyType({normalize_name(k): v for k, v in source.items()})
        self._aliases = MappingProxyType({
            normalize_name(k): normalize_name(v) for k, v in (SOIL_ALIASES if aliases is None else aliases).items()
        })
        self.default = default

    def with_overrides(self, overrides: Mapping[str, SoilProfile]) -> "SoilProfileTable":
        merged = dict(self._table)
        merged.update({self._key(k): v for k, v in overrides.items()})
        return SoilProfileTable(merged, self._aliases, self.default)

    def _key(self, soil_name: str) -> str:
        key = normalize_name(soil_name)
        return self._aliases.get(key, key)

    def soils(self):
        return sorted(self._table)

    def is_known(self, soil_name: str) -> bool:
        return self._key(soil_name) in self._table

    def lookup(self, soil_name: str) -> SoilProfile:
        profile = self._table.get(self._key(soil_name))
        if profile is None:
            log.warning(f"Unknown soil '{soil_name}'; using default profile {self.default}")
            return self.default
        return profile

    def soil_input(self, soil_name: str) -> SoilInput:
        """SoilInput for a stored soil name, flagged when the default profile was used."""
        profile = self.lookup(soil_name)
        return SoilInput(
            name=soil_name,
            water_retention_capacity=profile.retention_capacity,
            irrigation_interval_days=profile.interval_days,
            is_default=not self.is_known(soil_name),
        )


def soil_input_for(soil_name: str) -> SoilInput:
    return SoilProfileTable().soil_input(soil_name)
