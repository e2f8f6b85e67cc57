import numpy as np

from rcdesign.assembly import build_beam_model
from rcdesign.diagrams import WalkState, advance, initial_state, integrate, step
from rcdesign.model import BeamInput, DistributedLoad, PointLoad, Support, SupportType
from rcdesign.post import Reaction
from rcdesign.solve import solve_beam


def model_with_loads():
    beam = BeamInput(
        span=4.0,
        supports=[Support(0.0), Support(4.0, SupportType.ROLLER)],
        point_loads=[PointLoad(0.0, 3.0), PointLoad(1.0, 6.0)],
        distributed_loads=[DistributedLoad.uniform(0.0, 4.0, 2.0)],
        width=20.0,
        height=40.0,
    )
    return build_beam_model(beam)


def test_initial_state_applies_loads_at_the_left_end():
    model = model_with_loads()
    reactions = {0: Reaction(0, 0.0, 10.0, 1.5)}

    state = initial_state(model, reactions)

    assert np.isclose(state.shear, 10.0 - 3.0)
    assert np.isclose(state.moment, -1.5)


def test_advance_is_pure_and_trapezoidal():
    model = model_with_loads()
    reactions = {}
    start = WalkState(shear=8.0, moment=1.0)

    left = integrate(start, 0.5, 1.0, model)
    # 2 kN/m over 0.5 m
    assert np.isclose(left.shear, 7.0)
    assert np.isclose(left.moment, 1.0 + 0.5 * (8.0 + 7.0) * 0.5)

    after = advance(start, 0.5, 1.0, model, reactions)
    assert np.isclose(after.shear, 7.0 - 6.0)
    assert np.isclose(after.moment, left.moment)

    # Inputs untouched; same call, same answer
    assert start == WalkState(8.0, 1.0)
    assert advance(start, 0.5, 1.0, model, reactions) == after


def test_jump_window_is_half_open():
    """A load exactly at x_prev belongs to the previous step."""
    model = model_with_loads()
    state = WalkState(0.0, 0.0)

    assert np.isclose(advance(state, 1.0, 1.5, model, {}).shear, -1.0)
    assert np.isclose(advance(state, 0.5, 1.0, model, {}).shear, -1.0 - 6.0)


def test_jump_inside_a_step_acts_at_its_own_position():
    """
    A 6 kN load at x = 1.0 crossed by the step 0.8 → 1.2: the moment only
    sees the reduced shear over the last 0.2 m.
    """
    model = model_with_loads()
    start = WalkState(shear=8.0, moment=0.0)

    before, after = step(start, 0.8, 1.2, model, {})

    # 2 kN/m over 0.2 m, then the jump, then 2 kN/m over 0.2 m
    assert np.isclose(before.shear, 7.6)
    assert np.isclose(before.moment, 0.5 * (8.0 + 7.6) * 0.2)
    assert np.isclose(after.shear, 7.6 - 6.0 - 0.4)
    assert np.isclose(after.moment, before.moment + 0.5 * (1.6 + 1.2) * 0.2)
    assert advance(start, 0.8, 1.2, model, {}) == after


def test_interior_support_off_the_sample_grid():
    """Two-span beam whose middle support falls between stations."""
    beam = BeamInput(
        span=7.0,
        supports=[Support(0.0), Support(3.02, SupportType.ROLLER), Support(7.0, SupportType.ROLLER)],
        distributed_loads=[DistributedLoad(0.0, 7.0, 6.0, 14.0)],
        width=20.0,
        height=50.0,
    )
    diagrams = solve_beam(beam).diagrams
    last = diagrams.samples[-1]

    assert np.isclose(last.shear, 0.0, atol=1e-9)
    assert np.isclose(last.moment, 0.0, atol=2e-3)
    assert diagrams.max_moment_neg < 0.0
    assert np.isclose(diagrams.x_moment_neg, 3.02, atol=7.0 / 200)
