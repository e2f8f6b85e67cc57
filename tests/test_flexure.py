"""
Flexural sizing of one face: Kmd limit, minimum steel, bar packing.
"""

import math

import numpy as np
import pytest

from rcdesign.checks.flexure import (
    design_face,
    distribute_layers,
    effective_depth,
    estimated_steel,
    max_bars_per_layer,
    reinforcement_alternatives,
)
from rcdesign.config import EngineConfig
from rcdesign.materials import bar_area, rho_min


SECTION = dict(width=20.0, height=50.0, cover=2.5, stirrup_diameter=5.0, fck=25.0, fyk=500.0)


def face(md, bar=12.5, layers=1, config=EngineConfig(), **overrides):
    params = dict(SECTION, **overrides)
    return design_face(md, 'bottom', bar, allowed_layers=layers, config=config, **params)


def test_effective_depth():
    # 50 - 2.5 - 0.5 - 1.25/2
    assert np.isclose(effective_depth(50.0, 2.5, 5.0, 12.5), 46.375)


def test_typical_moment_is_designed():
    """Hand calculation for Md = 65.625 kN·m on 20x50, C25, CA-50."""
    f = face(65.625)

    fcd = 25 / 1.4 / 10
    fyd = 500 / 1.15 / 10
    d = 46.375
    kmd = 6562.5 / (20 * d**2 * fcd)
    beta_x = 1.25 * (1 - math.sqrt(1 - 2 * kmd))
    beta_z = 1 - 0.4 * beta_x
    As = 6562.5 / (beta_z * d * fyd)

    assert f.sufficient and f.fits and f.valid
    assert np.isclose(f.kmd, kmd)
    assert np.isclose(f.as_calc, As)
    assert f.as_required == f.as_calc
    assert f.count == math.ceil(As / bar_area(12.5))
    assert f.as_provided >= f.as_required


def test_kmd_limit_is_inclusive():
    """At exactly the limit the face is still designed; just above it is not."""
    kmd = face(300.0).kmd

    at_limit = face(300.0, config=EngineConfig(kmd_limit=kmd))
    assert at_limit.sufficient
    assert at_limit.as_calc is not None

    above_limit = face(300.0, config=EngineConfig(kmd_limit=np.nextafter(kmd, 0.0)))
    assert not above_limit.sufficient
    assert above_limit.as_calc is None
    assert above_limit.beta_x is None


def test_insufficient_face_still_reports_minimum_layout():
    f = face(400.0, width=12.0, height=30.0)

    assert f.kmd > 0.45
    assert f.as_calc is None
    assert not f.valid
    assert f.as_required == f.as_min
    assert sum(f.layers) == f.count >= 2


def test_negligible_moment_uses_constructive_steel():
    f = face(0.3)

    assert f.constructive
    assert np.isclose(f.as_required, rho_min(25.0) / 100 * 20 * 50)
    assert f.count == 2


@pytest.mark.parametrize("fck, expected", [(20, 0.150), (30, 0.150), (35, 0.164), (40, 0.179), (45, 0.194), (50, 0.208), (90, 0.208)])
def test_rho_min_table(fck, expected):
    assert rho_min(fck) == expected


def test_max_bars_per_layer():
    # available = 20 - 5 - 1 = 14 cm, s = max(2, 1.0, 2.28) = 2.28 cm
    assert max_bars_per_layer(20.0, 2.5, 5.0, 10.0) == math.floor((14 + 2.28) / (1.0 + 2.28))
    assert max_bars_per_layer(5.0, 2.5, 5.0, 10.0) == 0


def test_overflow_goes_to_last_layer():
    assert distribute_layers(5, 4, 2) == ((4, 1), True)
    assert distribute_layers(7, 3, 2) == ((3, 4), False)
    assert distribute_layers(2, 4, 1) == ((2,), True)


def test_bars_that_do_not_fit_mark_face_infeasible():
    f = face(250.0, bar=10.0, layers=1, width=20.0, height=80.0)

    assert f.sufficient
    assert not f.fits
    assert len(f.layers) == 1
    assert f.layers[0] == f.count


def test_alternatives_meet_target_area():
    target = 3.4
    options = reinforcement_alternatives(target, 20.0, 2.5, 5.0)

    assert [o.diameter for o in options] == [6.3, 8.0, 10.0, 12.5, 16.0, 20.0, 25.0]
    for o in options:
        assert o.area >= target
        assert o.count >= 2
        assert 1 <= o.layers <= 3


def test_alternatives_drop_crowded_arrangements():
    """40 cm² in a 20 cm web: only 25 mm bars fit in 3 layers with ≤ 16 bars."""
    options = reinforcement_alternatives(40.0, 20.0, 2.5, 5.0)

    assert [o.diameter for o in options] == [25.0]
    assert options[0].count == 9
    assert options[0].layers == 3


def test_estimated_steel_for_a_moment_past_the_kmd_limit():
    """As ≈ Md / (0.9·(h − 5)·fyd): 252 kN·m on a 30 cm section."""
    fyd_c = 500.0 / 1.15 / 10.0
    area = estimated_steel(252.0, 30.0, fyd_c)

    assert np.isclose(area, 25200.0 / (0.9 * 25.0 * fyd_c))
    assert area > 25.0
    # very shallow sections fall back to d ≈ h/2
    assert np.isclose(estimated_steel(10.0, 8.0, fyd_c), 1000.0 / (0.9 * 4.0 * fyd_c))
