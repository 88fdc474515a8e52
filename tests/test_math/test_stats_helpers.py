"""Tests for the shared numeric helpers."""

from __future__ import annotations

import pytest

from periodization_engine.math.stats import (
    clamp,
    clamp_score,
    mean,
    round_half_up,
    round_to,
    split_halves,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (70.5, 71),
            (35.5, 36),
            (76.49, 76),
            (0.5, 1),
            (2.5, 3),
            (-0.4, 0),
        ],
    )
    def test_rounds_halves_up(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected

    def test_float_noise_below_half_still_rounds_up(self) -> None:
        assert round_half_up(70.49999999999999) == 71

    def test_differs_from_bankers_rounding(self) -> None:
        assert round(70.5) == 70
        assert round_half_up(70.5) == 71


class TestRoundTo:
    def test_one_decimal(self) -> None:
        assert round_to(63.65, 1) == pytest.approx(63.7)

    def test_negative_value(self) -> None:
        assert round_to(-4.44, 1) == pytest.approx(-4.4)


class TestClamp:
    def test_clamp_into_score_range(self) -> None:
        assert clamp(120.0) == 100.0
        assert clamp(-5.0) == 0.0
        assert clamp(42.0) == 42.0

    def test_clamp_score_rounds(self) -> None:
        assert clamp_score(89.5) == 90
        assert clamp_score(140) == 100


class TestMeanAndHalves:
    def test_mean_of_empty_is_zero(self) -> None:
        assert mean([]) == 0.0

    def test_mean(self) -> None:
        assert mean([1.0, 2.0, 6.0]) == pytest.approx(3.0)

    def test_second_half_gets_extra_element(self) -> None:
        first, second = split_halves([1, 2, 3, 4, 5])
        assert list(first) == [1, 2]
        assert list(second) == [3, 4, 5]

    def test_single_element_has_empty_first_half(self) -> None:
        first, second = split_halves([7])
        assert list(first) == []
        assert list(second) == [7]
