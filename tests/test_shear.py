import numpy as np

from rcdesign.checks.shear import deflection_check, minimum_stirrup_check


def test_minimum_stirrup_ratio_passes():
    check = minimum_stirrup_check(
        max_shear=37.5, load_factor=1.4, fck=25.0, fywk=500.0,
        stirrup_diameter=5.0, spacing=15.0, width=20.0,
    )

    fctm = 0.3 * 25.0 ** (2 / 3)
    assert np.isclose(check.vd, 52.5)
    assert np.isclose(check.rho_sw_min, 0.2 * fctm / 500.0)
    assert np.isclose(check.asw, 2 * np.pi * 0.25**2)
    assert check.passes


def test_minimum_stirrup_ratio_fails_for_wide_spacing():
    check = minimum_stirrup_check(
        max_shear=20.0, load_factor=1.4, fck=25.0, fywk=500.0,
        stirrup_diameter=5.0, spacing=30.0, width=40.0,
    )
    assert check.rho_sw < check.rho_sw_min
    assert not check.passes


def test_weaker_stirrup_steel_needs_more_area():
    common = dict(max_shear=20.0, load_factor=1.4, fck=25.0,
                  stirrup_diameter=5.0, spacing=20.0, width=20.0)
    ca60 = minimum_stirrup_check(fywk=600.0, **common)
    ca25 = minimum_stirrup_check(fywk=250.0, **common)

    assert ca25.rho_sw_min > ca60.rho_sw_min
    assert ca60.passes and not ca25.passes


def test_deflection_limits():
    simple = deflection_check(-0.015, span=5.0, cantilever=False)
    assert simple.divisor == 250
    assert np.isclose(simple.limit, 2.0)
    assert np.isclose(simple.deflection, 1.5)
    assert simple.passes

    cantilever = deflection_check(-0.03, span=2.5, cantilever=True)
    assert cantilever.divisor == 125
    assert np.isclose(cantilever.limit, 2.0)
    assert not cantilever.passes
