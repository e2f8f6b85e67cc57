# rcdesign/checks/shear.py
"""Minimum transverse reinforcement and deflection checks for beams."""

import math
from dataclasses import dataclass

from ..config import CONFIG, EngineConfig
from ..materials import bar_area, fctm


@dataclass(frozen=True)
class StirrupCheck:
    vd: float               # design shear (kN)
    fctm: float             # MPa
    fywk: float             # MPa
    rho_sw_min: float       # ratio (not %)
    asw: float              # cm², both legs
    rho_sw: float           # ratio provided
    legs: int = 2

    @property
    def passes(self) -> bool:
        return self.rho_sw >= self.rho_sw_min


def minimum_stirrup_check(
    max_shear: float,
    load_factor: float,
    fck: float,
    fywk: float,
    stirrup_diameter: float,
    spacing: float,
    width: float,
    legs: int = 2,
) -> StirrupCheck:
    """
    Compare the provided stirrup ratio with ρsw,min = 0.2·fctm/fywk.

    Args:
        max_shear: Peak characteristic shear from the diagrams (kN)
        load_factor: γf
        fck, fywk: MPa
        stirrup_diameter: mm
        spacing, width: cm
    """
    f_ctm = fctm(fck)
    asw = legs * bar_area(stirrup_diameter)
    return StirrupCheck(
        vd=max_shear * load_factor,
        fctm=f_ctm,
        fywk=fywk,
        rho_sw_min=0.2 * f_ctm / fywk,
        asw=asw,
        rho_sw=asw / (spacing * width),
        legs=legs,
    )


@dataclass(frozen=True)
class DeflectionCheck:
    deflection: float       # cm, magnitude
    limit: float            # cm
    divisor: float

    @property
    def passes(self) -> bool:
        return self.deflection <= self.limit


def deflection_check(
    max_deflection_m: float,
    span: float,
    cantilever: bool,
    config: EngineConfig = CONFIG,
) -> DeflectionCheck:
    """Immediate elastic deflection against L/250 (L/125 for cantilevers)."""
    divisor = config.cantilever_deflection_divisor if cantilever else config.deflection_divisor
    return DeflectionCheck(
        deflection=math.fabs(max_deflection_m) * 100.0,
        limit=span * 100.0 / divisor,
        divisor=divisor,
    )
