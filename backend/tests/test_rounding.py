"""
test_rounding.py: half-up rounding of offer figures.

Ties go up (4353.125 -> 4353.13), read through the float's shortest repr so
binary representation error does not turn a printed tie into a round-down.
"""

import pytest

from elcalc.services.rounding import round_half_up, round_money, round_seconds, round_whole


class TestRoundMoney:

    @pytest.mark.parametrize("value, expected", [
        (4353.125, 4353.13),
        (0.625, 0.63),
        (2.675, 2.68),
        (1.005, 1.01),
        (263.675, 263.68),
        (1796.875, 1796.88),
        (1144.25, 1144.25),
        (0.0, 0.0),
        (9020.599999999999, 9020.6),
    ])
    def test_ties_round_up(self, value, expected):
        assert round_money(value) == expected

    def test_differs_from_builtin_on_exact_ties(self):
        """4353.125 is exact in binary, so round() sends it to the even neighbour."""
        assert round(4353.125, 2) == 4353.12
        assert round_money(4353.125) == 4353.13

    def test_negative_tie_moves_up(self):
        assert round_money(-0.125) == -0.12
        assert round_money(-0.126) == -0.13

    def test_three_places(self):
        assert round_half_up(0.0625, 3) == 0.063
        assert round_half_up(1.2344, 3) == 1.234


class TestRoundWhole:

    @pytest.mark.parametrize("value, expected", [
        (2.5, 3),
        (0.5, 1),
        (2519.5, 2520),
        (2519.49, 2519),
        (-2.5, -2),
        (4.5, 5),
    ])
    def test_half_up(self, value, expected):
        assert round_whole(value) == expected

    def test_seconds_are_ints(self):
        assert isinstance(round_seconds(1800.4), int)
        assert round_seconds(1800.5) == 1801
