"""
Uniformly and linearly varying distributed loads against closed forms.
"""

import numpy as np

from rcdesign.model import BeamInput, DistributedLoad, Support, SupportType
from rcdesign.solve import solve_beam


def test_simply_supported_udl_moment_and_shear():
    """
    Simply supported beam with a full-span UDL.

    Expected:
    - M_max = w·L²/8 at midspan
    - V_max = w·L/2 at the supports
    """
    L = 6.0
    w = 10.0

    beam = BeamInput(
        span=L,
        supports=[Support(0.0, SupportType.PIN), Support(L, SupportType.ROLLER)],
        distributed_loads=[DistributedLoad.uniform(0.0, L, w)],
        width=20.0,
        height=50.0,
    )
    analysis = solve_beam(beam)
    diagrams = analysis.diagrams

    assert np.isclose(diagrams.max_moment_pos, w * L**2 / 8, rtol=1e-9)
    assert np.isclose(diagrams.x_moment_pos, L / 2, atol=1e-9)
    assert np.isclose(diagrams.max_shear, w * L / 2, rtol=1e-9)

    for r in analysis.reactions.values():
        assert np.isclose(r.Fy, w * L / 2, rtol=1e-9)

    print(f"✓ M_max = {diagrams.max_moment_pos:.3f} kN·m (expected {w * L**2 / 8:.3f})")


def test_fixed_fixed_udl_end_moments():
    """
    Both ends clamped: end moments w·L²/12, midspan w·L²/24.

    The member load is lumped into sub-segment point loads, so the fixed-end
    moments carry a small discretisation error.
    """
    L = 5.0
    w = 12.0

    beam = BeamInput(
        span=L,
        supports=[Support(0.0, SupportType.FIXED), Support(L, SupportType.FIXED)],
        distributed_loads=[DistributedLoad.uniform(0.0, L, w)],
        width=20.0,
        height=50.0,
    )
    diagrams = solve_beam(beam).diagrams

    assert np.isclose(diagrams.max_moment_neg, -w * L**2 / 12, rtol=0.03)
    assert np.isclose(diagrams.max_moment_pos, w * L**2 / 24, rtol=0.05)
    assert np.isclose(diagrams.max_shear, w * L / 2, rtol=1e-9)


def test_triangular_load_reactions():
    """
    Load rising linearly from 0 to q over a simply supported span.

    R_left = q·L/6, R_right = q·L/3, and the peak moment q·L²/(9√3)
    sits at x = L/√3.
    """
    L = 6.0
    q = 9.0

    beam = BeamInput(
        span=L,
        supports=[Support(0.0), Support(L, SupportType.ROLLER)],
        distributed_loads=[DistributedLoad(0.0, L, 0.0, q)],
        width=20.0,
        height=50.0,
    )
    analysis = solve_beam(beam, n_samples=600)

    R_left = analysis.reactions[0].Fy
    R_right = analysis.reactions[1].Fy
    assert np.isclose(R_left, q * L / 6, rtol=1e-9)
    assert np.isclose(R_right, q * L / 3, rtol=1e-9)

    diagrams = analysis.diagrams
    m_expected = q * L**2 / (9 * np.sqrt(3))
    assert np.isclose(diagrams.max_moment_pos, m_expected, rtol=1e-3)
    assert np.isclose(diagrams.x_moment_pos, L / np.sqrt(3), atol=0.02)

    # The moment returns to zero at the roller
    assert np.isclose(diagrams.samples[-1].moment, 0.0, atol=1e-3)
