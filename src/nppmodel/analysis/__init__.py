"""Light-use-efficiency model formulas."""

from nppmodel.analysis.npp import (
    NPPComponents,
    absorbed_fraction,
    absorbed_radiation,
    compute_npp,
    compute_npp_components,
    light_use_efficiency,
    photosynthetic_radiation,
    temperature_ceiling,
    temperature_stress,
)

__all__ = [
    "NPPComponents",
    "absorbed_fraction",
    "absorbed_radiation",
    "compute_npp",
    "compute_npp_components",
    "light_use_efficiency",
    "photosynthetic_radiation",
    "temperature_ceiling",
    "temperature_stress",
]
