"""
Tests for Subdivision and grid arithmetic
"""

from fractions import Fraction

import pytest
from padseq_core.ir.subdivision import (
    Subdivision,
    step_duration,
    steps_per_bar,
    total_steps,
)


class TestSubdivisionValues:
    """Test steps-per-beat table"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("4n", Fraction(1)),
            ("4t", Fraction(3, 2)),
            ("8n", Fraction(2)),
            ("8t", Fraction(3)),
            ("16n", Fraction(4)),
            ("16t", Fraction(6)),
            ("32n", Fraction(8)),
            ("32t", Fraction(12)),
        ],
    )
    def test_steps_per_beat(self, value, expected):
        assert Subdivision(value).steps_per_beat == expected

    def test_triplet_flag(self):
        assert Subdivision.EIGHTH_TRIPLET.is_triplet
        assert not Subdivision.EIGHTH.is_triplet

    def test_base_of_triplet(self):
        assert Subdivision.SIXTEENTH_TRIPLET.base is Subdivision.SIXTEENTH
        assert Subdivision.QUARTER.base is Subdivision.QUARTER

    def test_labels(self):
        assert Subdivision.SIXTEENTH.label == "1/16"
        assert Subdivision.QUARTER_TRIPLET.label == "1/4T"

    def test_str_is_value(self):
        assert str(Subdivision.THIRTY_SECOND) == "32n"


class TestGridArithmetic:
    """Test step counts and durations"""

    def test_one_bar_sixteenths(self):
        assert total_steps(1, Subdivision.SIXTEENTH) == 16

    def test_quarter_triplets_per_bar(self):
        assert steps_per_bar(Subdivision.QUARTER_TRIPLET) == 6

    def test_four_bars_thirty_second_triplets(self):
        assert total_steps(4, Subdivision.THIRTY_SECOND_TRIPLET) == 192

    def test_step_duration_120bpm_sixteenths(self):
        # 60 / 120 / 4 = 0.125 seconds
        assert step_duration(120, Subdivision.SIXTEENTH) == pytest.approx(0.125)

    def test_step_duration_eighth_triplets(self):
        assert step_duration(60, Subdivision.EIGHTH_TRIPLET) == pytest.approx(1 / 3)
