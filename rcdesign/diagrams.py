# rcdesign/diagrams.py
"""
SHEAR, MOMENT AND DEFLECTION DIAGRAMS
=====================================

The FEM solve gives nodal displacements and support reactions. The diagrams
are then produced by WALKING the span from left to right (method of
sections) over N equal sub-intervals, carrying the running shear V and
moment M as explicit state.

Walking instead of evaluating closed forms per element means any mix of
trapezoidal loads, point loads and support reactions is handled the same way.

SIGN CONVENTIONS:
-----------------
- Positive V: resultant of the forces left of the section acts upward
- Positive M: sagging (tension on the bottom fibre)
- Deflection: upward positive, so gravity loads give negative values
- A counter-clockwise reaction moment reduces the internal moment: M -= Mz

THE WALK (one step x_prev → x):
-------------------------------
The sub-interval is cut at every reaction / point load in (x_prev, x]. On
each piece [a, b]:
1. V_after = V - (distributed load resultant in [a, b])
2. M += (V + V_after)/2 · (b - a)              trapezoidal rule
and at each cut:
       V += Fy, M -= Mz    (reaction)
       V -= P              (point load)

A support between two stations therefore shifts V where it really sits,
not at the next station. Each sample also keeps the state just before the
last jump in its interval, so a peak sitting at a support (e.g. the wall of
a cantilever fixed at the right end) is not lost.

Deflection between nodes uses the cubic Hermite shape functions of the
containing element, which reproduces the FEM deflected shape exactly rather
than interpolating linearly between nodes.
"""

import bisect
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

import numpy as np
import pandas as pd

from .config import N_SAMPLES, TOLERANCE
from .elements import hermite_shape_functions
from .kernel.dof import DOF_BEAM, RZ, V
from .loads import distributed_load_resultant
from .model import BeamModel
from .post import Reaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagramSample:
    """
    A single station of the diagrams.

    shear/moment are taken just right of the station (after any jump there);
    shear_left/moment_left just before the last jump in the preceding
    sub-interval, i.e. the left-hand limit when that jump is at the station.
    """
    position: float     # m
    shear: float        # kN
    moment: float       # kN·m
    deflection: float   # m
    shear_left: float = 0.0
    moment_left: float = 0.0


@dataclass(frozen=True)
class WalkState:
    """Running internal forces carried between stations."""
    shear: float = 0.0
    moment: float = 0.0


@dataclass(frozen=True)
class BeamDiagrams:
    """Dense diagram samples over [0, span] and their peak values."""
    samples: Tuple[DiagramSample, ...]
    max_moment_pos: float       # ≥ 0
    max_moment_neg: float       # ≤ 0
    max_shear: float            # max |V|
    max_deflection: float       # signed value with the largest magnitude (m)
    x_moment_pos: float
    x_moment_neg: float
    x_shear: float
    x_deflection: float

    def shear_series(self) -> List[Tuple[float, float]]:
        return [(s.position, s.shear) for s in self.samples]

    def moment_series(self) -> List[Tuple[float, float]]:
        return [(s.position, s.moment) for s in self.samples]

    def deflection_series(self) -> List[Tuple[float, float]]:
        return [(s.position, s.deflection) for s in self.samples]

    def to_dataframe(self) -> pd.DataFrame:
        """One row per station: x [m], V [kN], M [kN·m], deflection [m]."""
        return pd.DataFrame(
            {
                'x': [s.position for s in self.samples],
                'V': [s.shear for s in self.samples],
                'M': [s.moment for s in self.samples],
                'deflection': [s.deflection for s in self.samples],
            }
        )


def initial_state(model: BeamModel, reactions: Dict[int, Reaction]) -> WalkState:
    """State just right of x = 0: reaction and point loads sitting at the left end."""
    shear = 0.0
    moment = 0.0
    for r in reactions.values():
        if r.position <= TOLERANCE:
            shear += r.Fy
            moment -= r.Mz
    for p in model.point_loads:
        if p.position <= TOLERANCE:
            shear -= p.magnitude
    return WalkState(shear, moment)


def integrate(state: WalkState, x_prev: float, x: float, model: BeamModel) -> WalkState:
    """Distributed loads only, over [x_prev, x]."""
    dV = sum(distributed_load_resultant(d, x_prev, x) for d in model.distributed_loads)
    v_after = state.shear - dV
    moment = state.moment + 0.5 * (state.shear + v_after) * (x - x_prev)
    return WalkState(v_after, moment)


def jumps_between(
    x_prev: float,
    x: float,
    model: BeamModel,
    reactions: Dict[int, Reaction],
) -> List[Tuple[float, float, float]]:
    """(position, ΔV, ΔM) for every reaction and point load in (x_prev, x], left to right."""
    jumps = []
    for r in reactions.values():
        if x_prev + TOLERANCE < r.position <= x + TOLERANCE:
            jumps.append((r.position, r.Fy, -r.Mz))
    for p in model.point_loads:
        if x_prev + TOLERANCE < p.position <= x + TOLERANCE:
            jumps.append((p.position, -p.magnitude, 0.0))
    return sorted(jumps)


def step(
    state: WalkState,
    x_prev: float,
    x: float,
    model: BeamModel,
    reactions: Dict[int, Reaction],
) -> Tuple[WalkState, WalkState]:
    """
    Carry (V, M) across one sub-interval, splitting it at every jump.

    Returns:
        (before, after): the state just before the last jump location in
        the interval (equal to `after` when there is none), and the state
        just right of x.
    """
    a = x_prev
    before = None
    for xj, dV, dM in jumps_between(x_prev, x, model, reactions):
        b = min(max(xj, a), x)
        state = integrate(state, a, b, model)
        if before is None or b > a + TOLERANCE:
            before = state
        state = WalkState(state.shear + dV, state.moment + dM)
        a = b
    state = integrate(state, a, x, model)
    return (before if before is not None else state), state


def advance(
    state: WalkState,
    x_prev: float,
    x: float,
    model: BeamModel,
    reactions: Dict[int, Reaction],
) -> WalkState:
    """
    Carry (V, M) from x_prev to just right of x.

    Pure: returns a new state and leaves the inputs untouched.
    """
    return step(state, x_prev, x, model, reactions)[1]


def deflection_at(model: BeamModel, d_global: np.ndarray, x: float) -> float:
    """Hermite-interpolated vertical displacement (m) at position x."""
    positions = [n.x for n in model.nodes]
    i = bisect.bisect_right(positions, x) - 1
    i = min(max(i, 0), model.n_elements - 1)

    x1, x2 = model.element_span(i)
    L = x2 - x1
    xi = min(max((x - x1) / L, 0.0), 1.0)

    v_i = d_global[DOF_BEAM.idx(i, V)]
    theta_i = d_global[DOF_BEAM.idx(i, RZ)]
    v_j = d_global[DOF_BEAM.idx(i + 1, V)]
    theta_j = d_global[DOF_BEAM.idx(i + 1, RZ)]

    N1, N2, N3, N4 = hermite_shape_functions(xi)
    return float(N1 * v_i + N2 * theta_i * L + N3 * v_j + N4 * theta_j * L)


def walk_span(
    model: BeamModel,
    d_global: np.ndarray,
    reactions: Dict[int, Reaction],
    n_samples: int = N_SAMPLES,
) -> Iterator[DiagramSample]:
    """
    Yield n_samples + 1 ordered stations from x = 0 to x = span.

    This is a one-shot generator; collect it if the samples are needed twice.
    """
    dx = model.span / n_samples
    state = initial_state(model, reactions)
    left = state

    for i in range(n_samples + 1):
        x = i * dx
        if i > 0:
            x_prev = (i - 1) * dx
            left, state = step(state, x_prev, x, model, reactions)
        yield DiagramSample(
            x, state.shear, state.moment, deflection_at(model, d_global, x),
            left.shear, left.moment,
        )


def compute_beam_diagrams(
    model: BeamModel,
    d_global: np.ndarray,
    reactions: Dict[int, Reaction],
    n_samples: int = N_SAMPLES,
) -> BeamDiagrams:
    """
    Walk the span and collect samples together with the peak values.

    Parameters:
    -----------
    model : BeamModel
        The solved model
    d_global : np.ndarray
        Nodal displacements from the solver
    reactions : Dict[int, Reaction]
        Support reactions from post.compute_reactions
    n_samples : int
        Number of equal sub-intervals (stations = n_samples + 1)

    Returns:
    --------
    BeamDiagrams
    """
    samples = []
    m_pos, x_m_pos = 0.0, 0.0
    m_neg, x_m_neg = 0.0, 0.0
    v_max, x_v = 0.0, 0.0
    defl, x_defl = 0.0, 0.0

    for s in walk_span(model, d_global, reactions, n_samples):
        samples.append(s)
        for m in (s.moment_left, s.moment):
            if m > m_pos:
                m_pos, x_m_pos = m, s.position
            if m < m_neg:
                m_neg, x_m_neg = m, s.position
        for v in (s.shear_left, s.shear):
            if abs(v) > v_max:
                v_max, x_v = abs(v), s.position
        if abs(s.deflection) > abs(defl):
            defl, x_defl = s.deflection, s.position

    logger.debug(
        "Diagrams: M+=%.3f M-=%.3f |V|=%.3f defl=%.4e over %d stations",
        m_pos, m_neg, v_max, defl, len(samples),
    )

    return BeamDiagrams(
        samples=tuple(samples),
        max_moment_pos=m_pos,
        max_moment_neg=m_neg,
        max_shear=v_max,
        max_deflection=defl,
        x_moment_pos=x_m_pos,
        x_moment_neg=x_m_neg,
        x_shear=x_v,
        x_deflection=x_defl,
    )
