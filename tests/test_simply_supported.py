import numpy as np

from rcdesign.model import BeamInput, PointLoad, Support, SupportType
from rcdesign.solve import solve_beam


def test_simply_supported_midspan_pointload():
    """
    A beam on a pin and a roller with a load in the middle.

    Textbook results:
    - each support carries P/2
    - peak moment P·L/4 at midspan
    - shear is +P/2 on the left half, -P/2 on the right half
    """
    L = 4.0
    P = 10.0

    beam = BeamInput(
        span=L,
        supports=[Support(0.0, SupportType.PIN), Support(L, SupportType.ROLLER)],
        point_loads=[PointLoad(L / 2, P)],
        width=20.0,
        height=50.0,
    )
    analysis = solve_beam(beam)

    # Only the supports are nodes; the load is a member load
    assert len(analysis.model.nodes) == 2

    R_left = analysis.reactions[0].Fy
    R_right = analysis.reactions[1].Fy
    assert np.isclose(R_left, P / 2, rtol=1e-9)
    assert np.isclose(R_right, P / 2, rtol=1e-9)

    diagrams = analysis.diagrams
    assert np.isclose(diagrams.max_moment_pos, P * L / 4, rtol=1e-9)
    assert np.isclose(diagrams.x_moment_pos, L / 2, atol=1e-9)
    assert np.isclose(diagrams.max_shear, P / 2, rtol=1e-9)
    assert np.isclose(diagrams.max_moment_neg, 0.0, atol=1e-9)

    # Symmetric shear
    quarter = diagrams.samples[50]
    three_quarter = diagrams.samples[150]
    assert np.isclose(quarter.shear, P / 2)
    assert np.isclose(three_quarter.shear, -P / 2)

    # Sagging beam deflects down, most at midspan
    assert diagrams.max_deflection < 0.0
    assert np.isclose(diagrams.x_deflection, L / 2, atol=1e-9)


def test_diagram_sampling_grid():
    L = 6.0
    beam = BeamInput(
        span=L,
        supports=[Support(0.0), Support(L, SupportType.ROLLER)],
        point_loads=[PointLoad(1.5, 4.0)],
        width=20.0,
        height=40.0,
    )
    analysis = solve_beam(beam, n_samples=120)
    samples = analysis.diagrams.samples

    assert len(samples) == 121
    assert samples[0].position == 0.0
    assert np.isclose(samples[-1].position, L)
    positions = [s.position for s in samples]
    assert positions == sorted(positions)

    # Both ends are simply supported: the walk closes at zero
    assert np.isclose(samples[-1].shear, 0.0, atol=1e-8)
    assert np.isclose(samples[-1].moment, 0.0, atol=1e-8)

    df = analysis.diagrams.to_dataframe()
    assert list(df.columns) == ['x', 'V', 'M', 'deflection']
    assert len(df) == 121
