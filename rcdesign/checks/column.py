# rcdesign/checks/column.py
"""
Rectangular column design under centred axial load.

Slenderness gating, minimum first-order moments, second-order moments by
the approximate curvature method, and an empirical linear fit for the
mechanical reinforcement ratio ω in place of an interaction-diagram lookup.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

from ..config import CONFIG, EngineConfig
from ..materials import bar_area
from ..model import BucklingCase


@dataclass(frozen=True)
class AxisMoments:
    """First- and second-order design moments about one axis."""
    side: float             # m, section dimension in the bending direction
    slenderness: float
    e_min: float            # m
    m1_min: float           # kN·m
    e2: float               # m
    m_total: float          # kN·m

    @property
    def second_order(self) -> bool:
        return self.e2 > 0.0


@dataclass(frozen=True)
class ColumnBars:
    count: int
    side_bars_x: int        # per X face (top/bottom rows), excluding corners
    side_bars_y: int        # per Y face (left/right columns), excluding corners
    area: float             # cm²

    @property
    def row_bars(self) -> int:
        return 2 + self.side_bars_x


def slenderness(k: float, height: float, side: float) -> float:
    """λ = k·H·√12 / side (H and side in m)."""
    return k * height * math.sqrt(12.0) / side


def minimum_eccentricity(side: float) -> float:
    """e_min = 1.5 cm + 0.03·side, in m."""
    return 0.015 + 0.03 * side


def axial_ratio(nd: float, ac: float, fcd_knm2: float) -> float:
    """ν = Nd / (Ac·fcd)."""
    return nd / (ac * fcd_knm2)


def curvature(side: float, nu: float) -> float:
    """1/r = 0.005 / (h·(ν + 0.5)) bounded below by 0.005/h."""
    return max(0.005 / (side * (nu + 0.5)), 0.005 / side)


def axis_moments(
    nd: float,
    side: float,
    lam: float,
    le: float,
    nu: float,
    config: EngineConfig = CONFIG,
) -> AxisMoments:
    """
    Total design moment about one axis.

    Second-order effects apply only when λ exceeds the threshold; otherwise
    the total moment is the minimum first-order moment, unchanged.
    """
    e_min = minimum_eccentricity(side)
    m1 = nd * e_min
    if lam <= config.second_order_slenderness:
        return AxisMoments(side, lam, e_min, m1, 0.0, m1)

    e2 = le ** 2 / 10.0 * curvature(side, nu)
    return AxisMoments(side, lam, e_min, m1, e2, m1 + nd * e2)


def mechanical_ratio(nu: float, mu: float) -> float:
    """
    Empirical linear approximation ω ≈ (ν − 0.6) + 3μ, floored at zero.

    Stand-in for an interaction-diagram lookup with d'/h = 0.10; kept as is.
    """
    return max(0.0, (nu - 0.6) + 3.0 * mu)


def required_steel(
    omega: float,
    nd: float,
    ac: float,
    fcd_knm2: float,
    fyd_knm2: float,
    config: EngineConfig = CONFIG,
) -> Tuple[float, float, float, float]:
    """
    Longitudinal steel in cm².

    Returns:
        (as_calc, as_min, as_adopted, as_max)
    """
    as_calc = omega * ac * fcd_knm2 / fyd_knm2 * 1e4
    as_min = max(0.15 * nd / fyd_knm2 * 1e4, config.min_column_steel_ratio * ac * 1e4)
    as_max = config.max_column_steel_ratio * ac * 1e4
    return as_calc, as_min, max(as_calc, as_min), as_max


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def pack_column_bars(area: float, bar_diameter: float, width_x: float, width_y: float) -> ColumnBars:
    """
    Corner bars plus side bars shared in proportion to the side lengths.

    Each side pair gets an even count so opposite faces match; an odd count
    on the X faces is bumped by one bar, which raises the total.
    """
    one = bar_area(bar_diameter)
    count = max(4, math.ceil(area / one))

    side_x = side_y = 0
    remaining = count - 4
    if remaining > 0:
        n_y = round_half_up(remaining * width_y / (width_x + width_y))
        if n_y % 2 != 0:
            n_y -= 1
        n_y = max(n_y, 0)

        n_x = remaining - n_y
        if n_x % 2 != 0:
            n_x += 1
            count += 1

        side_x = n_x // 2
        side_y = n_y // 2

    return ColumnBars(count, side_x, side_y, count * one)


def stirrup_warnings(
    stirrup_diameter: float,
    spacing: float,
    bar_diameter: float,
    width_x: float,
    width_y: float,
    config: EngineConfig = CONFIG,
) -> List[str]:
    """Detailing rules for column ties; violations are warnings only."""
    warnings = []
    min_dia = max(config.min_stirrup_diameter, bar_diameter / 4.0)
    if stirrup_diameter < min_dia:
        warnings.append(
            f"Warning: stirrup diameter ø{stirrup_diameter:g} is below the minimum "
            f"max(5, ø{bar_diameter:g}/4) = {min_dia:.1f} mm."
        )
    max_spacing = min(config.max_stirrup_spacing, min(width_x, width_y), 12.0 * bar_diameter / 10.0)
    if spacing > max_spacing:
        warnings.append(
            f"Warning: stirrup spacing {spacing:g} cm exceeds the maximum {max_spacing:.1f} cm."
        )
    return warnings


def mode_shape(case: BucklingCase, xi: float) -> float:
    """Normalized buckled shape used to draw the lateral deflection profile."""
    if case == BucklingCase.PINNED_PINNED:
        return math.sin(math.pi * xi)
    if case == BucklingCase.FIXED_FREE:
        return 1.0 - math.cos(math.pi * xi / 2.0)
    if case == BucklingCase.FIXED_FIXED:
        return 0.5 * (1.0 - math.cos(2.0 * math.pi * xi))
    return 2.5 * xi * xi * (1.0 - xi)


def buckled_profile(
    case: BucklingCase,
    height: float,
    e_tot: float,
    n_points: int = 20,
) -> List[Tuple[float, float]]:
    """(height position m, lateral deflection cm) scaled by total eccentricity e_tot (m)."""
    profile = []
    for i in range(n_points + 1):
        xi = i / n_points
        profile.append((xi * height, e_tot * mode_shape(case, xi) * 100.0))
    return profile
