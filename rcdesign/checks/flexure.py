# rcdesign/checks/flexure.py
"""Flexural reinforcement sizing for rectangular sections (NBR 6118 rectangular stress block)."""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config import BAR_DIAMETERS, CONFIG, EngineConfig
from ..materials import bar_area, fcd, fyd, mpa_to_kn_cm2, rho_min
from ..results import ReinforcementOption


@dataclass(frozen=True)
class FaceDesign:
    """Design of one tension face (bottom for sagging, top for hogging)."""
    face: str                   # 'bottom' | 'top'
    md: float                   # design moment (kN·m)
    d: float                    # effective depth (cm)
    kmd: float
    beta_x: Optional[float]
    beta_z: Optional[float]
    as_calc: Optional[float]    # cm², None when the section is insufficient
    rho_min: float              # %
    as_min: float               # cm²
    as_required: float          # cm², adopted area before bar rounding
    constructive: bool
    bar_diameter: float         # mm
    count: int
    as_provided: float          # cm²
    layers: Tuple[int, ...]
    max_bars_per_layer: int
    sufficient: bool            # Kmd within the limit
    fits: bool                  # bars fit in the allowed layers

    @property
    def valid(self) -> bool:
        return self.sufficient and self.fits


def effective_depth(height: float, cover: float, stirrup_diameter: float, bar_diameter: float) -> float:
    """d = h - c - φt - φl/2, in cm (diameters in mm)."""
    return height - cover - stirrup_diameter / 10.0 - bar_diameter / 20.0


def moment_coefficient(md_kncm: float, width: float, d: float, fcd_kncm2: float) -> float:
    """Kmd = Md / (bw·d²·fcd), all in kN and cm."""
    return md_kncm / (width * d ** 2 * fcd_kncm2)


def neutral_axis_ratio(kmd: float) -> float:
    """βx = 1.25·(1 − √(1 − 2·Kmd)) for αc = 0.85 and λ = 0.8."""
    return 1.25 * (1.0 - math.sqrt(1.0 - 2.0 * kmd))


def minimum_spacing(bar_diameter: float, config: EngineConfig = CONFIG) -> float:
    """Clear spacing between bars (cm): max(2 cm, φ, 1.2·aggregate)."""
    return max(config.min_bar_spacing, bar_diameter / 10.0, 1.2 * config.aggregate_size)


def max_bars_per_layer(
    width: float,
    cover: float,
    stirrup_diameter: float,
    bar_diameter: float,
    config: EngineConfig = CONFIG,
) -> int:
    """
    Bars of one diameter that fit side by side inside the stirrups.

    n bars need n diameters and n-1 gaps: n·φ + (n-1)·s ≤ available.
    """
    available = width - 2 * cover - 2 * stirrup_diameter / 10.0
    s = minimum_spacing(bar_diameter, config)
    return max(0, math.floor((available + s) / (bar_diameter / 10.0 + s)))


def distribute_layers(count: int, per_layer: int, allowed_layers: int) -> Tuple[Tuple[int, ...], bool]:
    """
    Fill layers from the face inwards.

    Bars that do not fit in the allowed layers still go into the last layer
    so the reported total matches the count; the second value is False then.
    """
    layers: List[int] = []
    remaining = count
    fits = True
    while remaining > 0:
        if len(layers) >= allowed_layers:
            fits = False
            layers[-1] += remaining
            remaining = 0
        else:
            n = min(remaining, per_layer)
            layers.append(n)
            remaining -= n
    return tuple(layers), fits


def bar_count(area: float, diameter: float, minimum: int = 2) -> int:
    return max(minimum, math.ceil(area / bar_area(diameter)))


def design_face(
    md: float,
    face: str,
    bar_diameter: float,
    width: float,
    height: float,
    cover: float,
    stirrup_diameter: float,
    fck: float,
    fyk: float,
    allowed_layers: int,
    config: EngineConfig = CONFIG,
) -> FaceDesign:
    """
    Size the tension steel of one face.

    Args:
        md: Design moment (kN·m, ≥ 0)
        face: 'bottom' or 'top'
        bar_diameter: Chosen bar (mm)
        width, height, cover: Section (cm)
        stirrup_diameter: mm
        fck, fyk: MPa
        allowed_layers: Layers the bars may occupy

    Returns:
        FaceDesign. When Kmd exceeds the limit no area is computed
        (as_calc is None) and the face reports minimum steel only.
    """
    fcd_c = mpa_to_kn_cm2(fcd(fck))
    fyd_c = mpa_to_kn_cm2(fyd(fyk))
    md_kncm = md * 100.0

    d = effective_depth(height, cover, stirrup_diameter, bar_diameter)
    kmd = moment_coefficient(md_kncm, width, d, fcd_c)

    beta_x = beta_z = as_calc = None
    sufficient = kmd <= config.kmd_limit
    if sufficient:
        beta_x = neutral_axis_ratio(kmd)
        beta_z = 1.0 - 0.4 * beta_x
        as_calc = md_kncm / (beta_z * d * fyd_c)

    rho = rho_min(fck)
    as_min = rho / 100.0 * width * height

    constructive = md < config.negligible_moment
    as_required = as_min if constructive else max(as_calc or 0.0, as_min)

    count = bar_count(as_required, bar_diameter)
    per_layer = max_bars_per_layer(width, cover, stirrup_diameter, bar_diameter, config)
    layers, fits = distribute_layers(count, per_layer, allowed_layers)

    return FaceDesign(
        face=face,
        md=md,
        d=d,
        kmd=kmd,
        beta_x=beta_x,
        beta_z=beta_z,
        as_calc=as_calc,
        rho_min=rho,
        as_min=as_min,
        as_required=as_required,
        constructive=constructive,
        bar_diameter=bar_diameter,
        count=count,
        as_provided=count * bar_area(bar_diameter),
        layers=layers,
        max_bars_per_layer=per_layer,
        sufficient=sufficient,
        fits=fits,
    )


def estimated_steel(md: float, height: float, fyd_c: float) -> float:
    """
    Rough tension steel (cm²) for a moment the section cannot take.

    Assumes d ≈ h - 5 cm and z ≈ 0.9·d. Only used to size alternatives
    when the design route stops at the Kmd limit.
    """
    d_est = max(height - 5.0, 0.5 * height)
    return md * 100.0 / (0.9 * d_est * fyd_c)


def reinforcement_alternatives(
    target_area: float,
    width: float,
    cover: float,
    stirrup_diameter: float,
    diameters: Tuple[float, ...] = BAR_DIAMETERS,
    config: EngineConfig = CONFIG,
) -> List[ReinforcementOption]:
    """
    Bar arrangements that deliver target_area (cm²) with each commercial diameter.

    Arrangements needing more than config.max_layers layers or more than
    config.max_alternative_bars bars are dropped.
    """
    options = []
    for dia in diameters:
        if dia < config.min_alternative_diameter:
            continue
        count = bar_count(target_area, dia)
        if count > config.max_alternative_bars:
            continue
        per_layer = max_bars_per_layer(width, cover, stirrup_diameter, dia, config)
        layers = next(
            (k for k in range(1, config.max_layers + 1) if count <= per_layer * k),
            None,
        )
        if layers is None:
            continue
        options.append(ReinforcementOption(dia, count, count * bar_area(dia), layers))
    return options
