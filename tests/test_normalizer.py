"""
Test: ScoreNormalizer composite and simple paths, rounding and grading helpers.
"""
import itertools

import pytest

from backend.app.core.errors import ValidationError
from backend.app.core.scoring.grading import grade_for, round1
from backend.app.core.scoring.normalizer import ScoreNormalizer
from backend.app.schemas.evaluation_schemas import RawSubScore


def subs(*values):
    return [RawSubScore(sub_field_name=f"s{i}", score=v) for i, v in enumerate(values)]


@pytest.fixture
def normalizer():
    return ScoreNormalizer()


class TestCompositeNormalize:
    def test_full_marks_is_ten(self, normalizer):
        assert normalizer.normalize(subs(5, 5, 5)) == 10.0

    def test_effective_max_scales_with_supplied_count(self, normalizer):
        assert normalizer.normalize(subs(5, 5)) == 10.0
        assert normalizer.normalize(subs(5)) == 10.0

    def test_empty_is_zero(self, normalizer):
        assert normalizer.normalize([]) == 0.0

    def test_mid_scores(self, normalizer):
        assert normalizer.normalize(subs(3, 3, 3)) == 6.0
        assert normalizer.normalize(subs(4, 4, 3)) == 7.3

    def test_rounds_to_one_decimal(self, normalizer):
        # 23 / 30 * 10 = 7.666...
        assert normalizer.normalize(subs(5, 5, 5, 4, 2, 2)) == 7.7

    def test_declared_sub_max_is_respected(self, normalizer):
        assert normalizer.normalize(subs(10, 10), sub_field_max=10) == 10.0
        assert normalizer.normalize(subs(5, 5), sub_field_max=10) == 5.0

    def test_over_max_is_clamped(self, normalizer):
        assert normalizer.normalize(subs(9, 5, 5)) == 10.0

    def test_negative_rejected(self, normalizer):
        with pytest.raises(ValidationError):
            normalizer.normalize(subs(5, -1, 5))

    def test_nan_rejected(self, normalizer):
        with pytest.raises(ValidationError, match="not a number"):
            normalizer.normalize(subs(5, float("nan"), 5))

    def test_zero_sub_max_is_zero(self, normalizer):
        assert normalizer.normalize(subs(3, 3), sub_field_max=0) == 0.0

    def test_always_within_bounds(self, normalizer):
        for combo in itertools.product(range(6), repeat=3):
            assert 0.0 <= normalizer.normalize(subs(*combo)) <= 10.0


class TestSimpleNormalize:
    def test_scales_to_ten(self, normalizer):
        assert normalizer.normalize_simple(7, 10) == 7.0
        assert normalizer.normalize_simple(3, 4) == 7.5
        assert normalizer.normalize_simple(12, 15) == 8.0

    def test_zero_max(self, normalizer):
        assert normalizer.normalize_simple(4, 0) == 0.0

    def test_clamped_at_ten(self, normalizer):
        assert normalizer.normalize_simple(12, 10) == 10.0

    def test_negative_rejected(self, normalizer):
        with pytest.raises(ValidationError):
            normalizer.normalize_simple(-0.5, 10)

    def test_nan_and_infinity_rejected(self, normalizer):
        for value in (float("nan"), float("inf")):
            with pytest.raises(ValidationError):
                normalizer.normalize_simple(value, 10)


class TestRound1:
    def test_half_up(self):
        assert round1(7.25) == 7.3
        assert round1(6.85) == 6.9
        assert round1(0.05) == 0.1

    def test_below_half(self):
        assert round1(7.249) == 7.2
        assert round1(7.666666666666667) == 7.7


class TestGradeFor:
    @pytest.mark.parametrize("score,grade", [
        (10.0, "Excellent"),
        (9.0, "Excellent"),
        (8.99, "Good"),
        (7.5, "Good"),
        (7.49, "Average"),
        (6.0, "Average"),
        (5.99, "Improvement Required"),
        (4.0, "Improvement Required"),
        (3.99, "Unsatisfactory"),
        (0.0, "Unsatisfactory"),
    ])
    def test_thresholds(self, score, grade):
        assert grade_for(score) == grade
