import pytest

from hyperlayer.atmosphere import earth_pt, parse_entry_params, set_entry_conditions
from hyperlayer.gas import GAM
from hyperlayer.parsing import ParseError
from hyperlayer.profile import ProfileParams


def test_lower_stratosphere_is_isothermal():
    temperature_a, _ = earth_pt(12.0)
    temperature_b, _ = earth_pt(20.0)
    assert temperature_a == pytest.approx(-56.46 + 273.15)
    assert temperature_b == temperature_a


def test_pressure_decreases_with_altitude():
    pressures = [earth_pt(altitude)[1] for altitude in (1, 5, 10, 15, 20, 30, 40, 50)]
    assert all(high < low for low, high in zip(pressures, pressures[1:]))


def test_troposphere_temperature_decreases():
    assert earth_pt(8.0)[0] < earth_pt(2.0)[0]


@pytest.mark.parametrize("boundary", [11.0, 25.0])
def test_layers_nearly_continuous(boundary):
    below = earth_pt(boundary)
    above = earth_pt(boundary + 1e-9)
    assert above[0] == pytest.approx(below[0], rel=0.01)
    assert above[1] == pytest.approx(below[1], rel=0.03)


def test_set_entry_conditions():
    params = ProfileParams()
    set_entry_conditions(30.0, 3.0, params)
    _, pressure = earth_pt(30.0)
    assert params.pe == pressure
    # speed of sound squared equals (gamma - 1) * h for this gas
    assert params.ue**2 == pytest.approx(9.0 * (GAM - 1) * params.he)


def test_set_entry_conditions_rejects_ground():
    with pytest.raises(ValueError):
        set_entry_conditions(0.0, 1.0, ProfileParams())


def test_parse_entry_params():
    assert parse_entry_params(["-mach", "2.5", "-altitude", "40"]) == (40.0, 2.5)


def test_parse_entry_params_keeps_defaults():
    assert parse_entry_params(["-n", "10"], 5.0, 0.2) == (5.0, 0.2)


def test_parse_entry_params_incomplete(capsys):
    assert parse_entry_params(["-mach"], 5.0, 0.2) == (5.0, 0.2)
    assert "incomplete" in capsys.readouterr().out


def test_parse_entry_params_bad_value():
    with pytest.raises(ParseError):
        parse_entry_params(["-altitude", "high"])