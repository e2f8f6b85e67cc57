# loads.py - Fixed-end actions and equivalent nodal loads for member loads
"""
Member loads never enter the stiffness equations directly. Each element sees
its loads through FIXED-END ACTIONS: the reactions the loads would produce if
both element ends were fully clamped. The global load vector gets the
negative of those actions, and force recovery adds them back.

Both call sites go through fixed_end_actions(), so the load vector and the
recovered end forces can never disagree.

SIGN CONVENTION:
----------------
- Load magnitudes: downward positive (kN, kN/m)
- Returned actions: forces upward positive, moments counter-clockwise positive
- Vector order matches the element DOFs: [R1, M1, R2, M2]
"""

import numpy as np
from typing import Iterable, Iterator, Tuple

from .config import LOAD_SUBSEGMENTS, TOLERANCE
from .model import DistributedLoad, PointLoad


def point_load_fixed_end_actions(P: float, a: float, L: float) -> np.ndarray:
    """
    Fixed-end actions for a point load P at distance a from the left end.

    R1 = P·b²(3a+b)/L³    M1 =  P·a·b²/L²
    R2 = P·a²(a+3b)/L³    M2 = -P·a²·b/L²

    Examples:
    --------
    >>> point_load_fixed_end_actions(10.0, 2.0, 4.0)
    array([ 5.,  5.,  5., -5.])
    """
    b = L - a
    L2 = L * L
    L3 = L2 * L
    return np.array([
        P * b * b * (3 * a + b) / L3,
        P * a * b * b / L2,
        P * a * a * (a + 3 * b) / L3,
        -P * a * a * b / L2,
    ], dtype=float)


def lump_distributed_load(
    load: DistributedLoad,
    x1: float,
    x2: float,
    n_segments: int = LOAD_SUBSEGMENTS,
) -> Iterator[Tuple[float, float]]:
    """
    Clip a trapezoidal load to [x1, x2] and lump it into point loads.

    The overlap is split into n_segments equal pieces; each piece becomes a
    point load equal to its trapezoid area, placed at the trapezoid centroid
    so the lumped loads keep both the resultant and its moment.

    Yields:
    -------
    (position, magnitude) for each sub-segment, nothing if there is no overlap
    """
    start = max(x1, load.start)
    end = min(x2, load.end)
    if end <= start:
        return

    q1 = load.intensity(start)
    q2 = load.intensity(end)
    dx = (end - start) / n_segments

    for k in range(n_segments):
        qa = q1 + (q2 - q1) * k / n_segments
        qb = q1 + (q2 - q1) * (k + 1) / n_segments
        P = 0.5 * (qa + qb) * dx
        if abs(qa + qb) > TOLERANCE:
            offset = dx * (qa + 2.0 * qb) / (3.0 * (qa + qb))
            # a piece whose intensity changes sign can put it outside
            offset = min(max(offset, 0.0), dx)
        else:
            offset = 0.5 * dx
        yield start + dx * k + offset, P


def is_interior(x: float, x1: float, x2: float) -> bool:
    """True when x lies strictly inside (x1, x2), away from both nodes."""
    return x1 + TOLERANCE < x < x2 - TOLERANCE


def fixed_end_actions(
    x1: float,
    x2: float,
    point_loads: Iterable[PointLoad],
    distributed_loads: Iterable[DistributedLoad],
    n_segments: int = LOAD_SUBSEGMENTS,
) -> np.ndarray:
    """
    Total fixed-end actions [R1, M1, R2, M2] on the element spanning [x1, x2].

    Point loads sitting on a node are not member loads and are skipped here;
    assembly applies them directly to the node.

    Parameters:
    -----------
    x1, x2 : float
        Element end positions (m), x2 > x1
    point_loads : Iterable[PointLoad]
        All point loads on the beam (those outside the element are ignored)
    distributed_loads : Iterable[DistributedLoad]
        All distributed loads on the beam (clipped to the element)
    n_segments : int
        Sub-segments used to lump each clipped distributed load

    Returns:
    --------
    np.ndarray
        Shape (4,) fixed-end actions in element DOF order
    """
    L = x2 - x1
    fea = np.zeros(4, dtype=float)

    for load in distributed_loads:
        for px, P in lump_distributed_load(load, x1, x2, n_segments):
            fea += point_load_fixed_end_actions(P, px - x1, L)

    for p in point_loads:
        if is_interior(p.position, x1, x2):
            fea += point_load_fixed_end_actions(p.magnitude, p.position - x1, L)

    return fea


def distributed_load_resultant(load: DistributedLoad, a: float, b: float) -> float:
    """Force (kN) carried by the part of the load inside [a, b] (trapezoidal rule, exact for linear q)."""
    s = max(a, load.start)
    e = min(b, load.end)
    if e <= s:
        return 0.0
    return 0.5 * (load.intensity(s) + load.intensity(e)) * (e - s)
