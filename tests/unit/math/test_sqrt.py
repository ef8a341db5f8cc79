"""Tests for the Babylonian integer square root."""

import math
import random

import pytest

from quantumswap.math import isqrt


class TestIsqrt:
    @pytest.mark.parametrize(
        ("y", "expected"),
        [(0, 0), (1, 1), (2, 1), (3, 1), (4, 2), (15, 3), (16, 4), (17, 4), (10**36, 10**18)],
    )
    def test_known_values(self, y, expected):
        assert isqrt(y) == expected

    def test_first_deposit_product(self):
        """sqrt(1000e18 * 1000e18) is exactly 1000e18."""
        assert isqrt(1000 * 10**18 * 1000 * 10**18) == 1000 * 10**18

    def test_matches_floor_sqrt(self):
        """Agrees with math.isqrt across magnitudes up to 2**224."""
        rng = random.Random(1234)
        for _ in range(500):
            y = rng.randrange(0, 2 ** rng.randint(1, 224))
            assert isqrt(y) == math.isqrt(y)

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            isqrt(-1)
