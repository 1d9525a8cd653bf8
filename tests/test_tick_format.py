import pytest
from matplotlib.ticker import FuncFormatter

from radar_plotter.plotting.helpers import format_tick, tick_formatter


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.5, "0.50"),
        (0.126, "0.13"),
        (-0.25, "-0.25"),
        (5.27, "5.3"),
        (-3.04, "-3.0"),
        (10, "10"),
        (123.4, "123"),
        (1896.5, "1897"),
        (-42.6, "-43"),
        (-0.001, "0.00"),
    ],
)
def test_decimal_mode_precision_tiers(value, expected):
    assert format_tick(value, integer_mode=False) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(0.4, "0"), (0.5, "1"), (7.5, "8"), (22.5, "23"), (-2.5, "-2"), (-0.4, "0"), (1500, "1500")],
)
def test_integer_mode_rounds_half_up(value, expected):
    assert format_tick(value, integer_mode=True) == expected


@pytest.mark.parametrize("value", [0.0, 3.49, 3.5, 17.2, -8.6, 99.99, 12345.5])
def test_integer_labels_parse_back_to_same_integer(value):
    label = format_tick(value, integer_mode=True)
    assert int(label) == int(format_tick(float(label), integer_mode=True))
    assert "." not in label


def test_non_numbers_render_empty():
    assert format_tick(float("nan"), integer_mode=False) == ""
    assert format_tick(float("inf"), integer_mode=True) == ""
    assert format_tick("x", integer_mode=True) == ""


def test_tick_formatter_wraps_format_tick():
    fmt = tick_formatter(False)
    assert isinstance(fmt, FuncFormatter)
    assert fmt(0.5, 0) == "0.50"
