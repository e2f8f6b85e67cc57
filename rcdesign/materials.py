"""
MATERIALS: CONCRETE AND STEEL PROPERTIES
========================================

Derived material constants used by both the FEM model and the design checks.

UNITS:
------
Inputs follow the way engineers write them on drawings:
- fck, fyk in MPa
- section sides in cm
- bar diameters in mm

The FEM works in kN and m, so the modulus is returned in kN/m². The design
checks work in kN and cm, so design strengths are also offered in kN/cm².
"""

import math

from .config import GAMMA_C, GAMMA_S


def secant_modulus(fck: float) -> float:
    """
    Secant elastic modulus of concrete in kN/m².

    Eci = 5600·√fck (MPa), Ecs = 0.85·Eci (NBR 6118 8.2.8 with αi≈0.85).
    """
    eci = 5600.0 * math.sqrt(fck)
    return 0.85 * eci * 1000.0


def rectangular_inertia(width_cm: float, height_cm: float) -> float:
    """Second moment of area b·h³/12 in m⁴ for a section given in cm."""
    b = width_cm / 100.0
    h = height_cm / 100.0
    return b * h ** 3 / 12.0


def rho_min(fck: float) -> float:
    """
    Minimum flexural reinforcement ratio (%) per NBR 6118 Tab. 17.3.

    Grades above C50 are not covered; the C50 value is kept as a
    conservative cap.
    """
    if fck <= 30:
        return 0.150
    if fck <= 35:
        return 0.164
    if fck <= 40:
        return 0.179
    if fck <= 45:
        return 0.194
    return 0.208


def fcd(fck: float) -> float:
    """Design concrete strength (MPa)."""
    return fck / GAMMA_C


def fyd(fyk: float) -> float:
    """Design steel strength (MPa)."""
    return fyk / GAMMA_S


def fctm(fck: float) -> float:
    """Mean tensile strength of concrete (MPa)."""
    return 0.3 * fck ** (2.0 / 3.0)


def mpa_to_kn_cm2(value: float) -> float:
    return value / 10.0


def mpa_to_kn_m2(value: float) -> float:
    return value * 1000.0


def bar_area(diameter_mm: float) -> float:
    """Cross-sectional area (cm²) of one bar of the given diameter."""
    return math.pi * (diameter_mm / 20.0) ** 2
