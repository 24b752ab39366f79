import pytest

from ofmesh.optimization import line_search


def test_quadratic_minimum():
    t = line_search(lambda x: (x - 0.3) ** 2)
    assert abs(t - 0.3) < 0.05


def test_decreasing_function_goes_right():
    t = line_search(lambda x: -10.0 * x)
    assert t > 0.95


def test_increasing_function_goes_left():
    t = line_search(lambda x: 10.0 * x)
    assert t < 0.05


def test_constant_function_returns_first_probe():
    assert line_search(lambda x: 5.0) == pytest.approx(1 - 0.618)


def test_calls_function_only_inside_interval():
    seen = []

    def f(x):
        seen.append(x)
        return (x - 0.7) ** 4

    t = line_search(f)
    assert seen
    assert all(0.0 <= x <= 1.0 for x in seen)
    assert t in seen
    assert 0.5 < t < 0.8