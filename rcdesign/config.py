# rcdesign/config.py
"""
Engine configuration and numeric constants.

Every tolerance and magic number the solver and the design checks depend on
lives here, so there is exactly one place to look when a result drifts.
"""

from dataclasses import dataclass
from typing import Tuple


# Position tolerance (m) for node snapping and load/support matching
TOLERANCE = 1e-5

# Penalty stiffness added to restrained DOF diagonals. Fixed: must dominate
# EI/L³-scale terms without wrecking the elimination.
PENALTY_STIFFNESS = 1e20

# Pivot magnitude below which a column is treated as already eliminated
PIVOT_EPS = 1e-10

# Number of equal sub-intervals used to walk the span
N_SAMPLES = 200

# Sub-segments used to lump a distributed load into point loads per element
LOAD_SUBSEGMENTS = 5

# Partial safety factors (NBR 6118 Tab. 12.1, normal combination)
GAMMA_C = 1.4
GAMMA_S = 1.15
GAMMA_F = 1.4

# Commercial diameters (mm)
BAR_DIAMETERS: Tuple[float, ...] = (6.3, 8.0, 10.0, 12.5, 16.0, 20.0, 25.0)
STIRRUP_DIAMETERS: Tuple[float, ...] = (5.0, 6.3, 8.0, 10.0)


@dataclass(frozen=True)
class EngineConfig:
    """Design limits used by the beam and column checks."""

    # Flexure
    kmd_limit: float = 0.45
    alpha_c: float = 0.85
    block_depth_factor: float = 0.80
    negligible_moment: float = 0.5      # kN·m, below this only minimum steel
    aggregate_size: float = 1.9         # cm, proxy for max aggregate diameter
    min_bar_spacing: float = 2.0        # cm
    max_layers: int = 3
    max_alternative_bars: int = 16
    min_alternative_diameter: float = 6.3

    # Serviceability
    deflection_divisor: float = 250.0
    cantilever_deflection_divisor: float = 125.0

    # Column
    max_slenderness: float = 140.0
    second_order_slenderness: float = 35.0
    max_column_steel_ratio: float = 0.04
    min_column_steel_ratio: float = 0.004
    column_cover: float = 3.0           # cm
    max_stirrup_spacing: float = 20.0   # cm
    min_stirrup_diameter: float = 5.0   # mm


# Global config instance
CONFIG = EngineConfig()
