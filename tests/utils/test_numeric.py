import math

import numpy as np
import pytest

from dryconomy.utils.numeric import is_finite_number, safe_number


@pytest.mark.parametrize("value,expected", [
    (1.5, 1.5),
    (3, 3.0),
    ("2.25", 2.25),
    (np.float64(4.0), 4.0),
    (None, 0.0),
    (float("nan"), 0.0),
    (math.inf, 0.0),
    (-math.inf, 0.0),
    ("abc", 0.0),
    ([1, 2], 0.0),
])
def test_safe_number(value, expected):
    result = safe_number(value)
    assert result == expected
    assert type(result) is float


def test_safe_number_custom_default():
    assert safe_number(float("nan"), default=-1.0) == -1.0
    assert safe_number(1.0 / 3.0, default=-1.0) == pytest.approx(0.3333333)


def test_division_guard():
    with np.errstate(divide="ignore", invalid="ignore"):
        assert safe_number(np.float64(1.0) / np.float64(0.0)) == 0.0
        assert safe_number(np.float64(0.0) / np.float64(0.0)) == 0.0


@pytest.mark.parametrize("value,expected", [
    (1, True),
    (0.5, True),
    (np.int32(7), True),
    (True, False),
    (float("nan"), False),
    (math.inf, False),
    ("5", False),
    (None, False),
])
def test_is_finite_number(value, expected):
    assert is_finite_number(value) is expected
