# Euler–Bernoulli beam element stiffness and Hermite interpolation

import numpy as np
from typing import Tuple


def beam_local_stiffness(EI: float, L: float) -> np.ndarray:
    """
    Bending stiffness of a 2-node beam element.

    DOF order: [v1, rz1, v2, rz2]
    """
    if L <= 0.0:
        raise ValueError(f"Element length must be positive, got {L}.")

    k = EI / L ** 3
    L2 = L * L

    return k * np.array([
        [ 12.0,   6*L,  -12.0,   6*L],
        [  6*L,  4*L2,   -6*L,  2*L2],
        [-12.0,  -6*L,   12.0,  -6*L],
        [  6*L,  2*L2,   -6*L,  4*L2],
    ], dtype=float)


def hermite_shape_functions(xi: float) -> Tuple[float, float, float, float]:
    """
    Cubic Hermite shape functions at normalized position xi ∈ [0, 1].

    v(xi) = N1*v_i + N2*theta_i*L + N3*v_j + N4*theta_j*L
    """
    N1 = 1 - 3*xi**2 + 2*xi**3
    N2 = xi - 2*xi**2 + xi**3
    N3 = 3*xi**2 - 2*xi**3
    N4 = -xi**2 + xi**3
    return N1, N2, N3, N4
