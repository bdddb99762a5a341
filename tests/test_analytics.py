"""
Test: GlobalAnalyticsAggregator rankings and the per-form metric summary.
"""
import pytest

from backend.app.core.errors import NotFoundError
from backend.app.core.scoring.analytics import GlobalAnalyticsAggregator
from backend.app.core.scoring.metric_summary import summarize_form_metrics
from backend.app.schemas.evaluation_schemas import NormalizedFieldScore, RawSubScore
from backend.app.schemas.student_schemas import EvaluationRecord, FormMeta, StudentIdentity

FORM_A = FormMeta(form_id=10, form_name="Form A")
FORM_B = FormMeta(form_id=20, form_name="Form B")


def record(intern_id, final, grade="Good", comment="", **fields):
    return EvaluationRecord(
        intern_id=intern_id,
        final_score=final,
        final_grade=grade,
        comment=comment,
        field_scores=[NormalizedFieldScore(field_name=k, score=v) for k, v in fields.items()],
    )


@pytest.fixture
def students():
    return [
        StudentIdentity(student_id=1, name="Alice"),
        StudentIdentity(student_id=2, name="Bob"),
        StudentIdentity(student_id=3, name="Cara"),
    ]


@pytest.fixture
def evaluations():
    return {
        10: [record(1, 8.0, comment="solid", TC=8.0, X=6.0), record(2, 6.0, grade="Average", TC=6.0, X=9.0)],
        20: [record(1, 7.0, TC=9.0)],
    }


@pytest.fixture
def aggregator():
    return GlobalAnalyticsAggregator()


def by_id(results):
    return {r.student_id: r for r in results}


class TestGlobalRanking:
    def test_everyone_listed(self, aggregator, students, evaluations):
        results = aggregator.aggregate(students, [FORM_A, FORM_B], evaluations)
        assert [r.name for r in results] == ["Alice", "Bob", "Cara"]
        assert [r.rank for r in results] == [1, 2, 3]

    def test_unevaluated_student(self, aggregator, students, evaluations):
        cara = by_id(aggregator.aggregate(students, [FORM_A, FORM_B], evaluations))[3]
        assert cara.average_score == 0.0
        assert cara.total_forms == 0
        assert cara.evaluations == []
        assert cara.metric_scores == {}

    def test_averages(self, aggregator, students, evaluations):
        alice = by_id(aggregator.aggregate(students, [FORM_A, FORM_B], evaluations))[1]
        assert alice.average_score == 7.5
        assert alice.total_forms == 2
        assert alice.metric_scores["TC"] == 8.5

    def test_partial_metric_mean(self, aggregator, students, evaluations):
        alice = by_id(aggregator.aggregate(students, [FORM_A, FORM_B], evaluations))[1]
        # X only exists on Form A
        assert alice.metric_scores["X"] == 6.0

    def test_history_carries_form_and_comment(self, aggregator, students, evaluations):
        alice = by_id(aggregator.aggregate(students, [FORM_A, FORM_B], evaluations))[1]
        assert [h.form_name for h in alice.evaluations] == ["Form A", "Form B"]
        assert alice.evaluations[0].comment == "solid"
        assert alice.evaluations[0].final_grade == "Good"

    def test_average_rounded_half_up(self, aggregator, students):
        evals = {10: [record(1, 6.8)], 20: [record(1, 7.7)]}
        alice = by_id(aggregator.aggregate(students, [FORM_A, FORM_B], evals))[1]
        assert alice.average_score == 7.3

    def test_ties_break_on_student_id(self, aggregator):
        roster = [
            StudentIdentity(student_id=7, name="Gus"),
            StudentIdentity(student_id=4, name="Dan"),
        ]
        evals = {10: [record(7, 7.0), record(4, 7.0)]}
        results = aggregator.aggregate(roster, [FORM_A], evals)
        assert [r.student_id for r in results] == [4, 7]
        assert [r.rank for r in results] == [1, 2]

    def test_unknown_intern_skipped(self, aggregator, students, evaluations):
        evaluations[10].append(record(99, 10.0))
        results = aggregator.aggregate(students, [FORM_A, FORM_B], evaluations)
        assert len(results) == 3
        assert results[0].student_id == 1

    def test_unknown_form_skipped(self, aggregator, students, evaluations):
        evaluations[30] = [record(3, 10.0)]
        cara = by_id(aggregator.aggregate(students, [FORM_A, FORM_B], evaluations))[3]
        assert cara.total_forms == 0


class TestRestrictedRanking:
    def test_only_students_with_that_form(self, aggregator, students, evaluations):
        results = aggregator.aggregate(students, [FORM_A, FORM_B], evaluations, form_id=20)
        assert [r.student_id for r in results] == [1]
        assert results[0].average_score == 7.0
        assert results[0].metric_scores == {"TC": 9.0}
        assert results[0].total_forms == 1
        assert results[0].rank == 1

    def test_reranks_within_form(self, aggregator, students, evaluations):
        results = aggregator.aggregate(students, [FORM_A, FORM_B], evaluations, form_id=10)
        assert [(r.student_id, r.average_score, r.rank) for r in results] == [(1, 8.0, 1), (2, 6.0, 2)]

    def test_unknown_form(self, aggregator, students, evaluations):
        with pytest.raises(NotFoundError):
            aggregator.aggregate(students, [FORM_A, FORM_B], evaluations, form_id=404)


class TestMetricSort:
    def test_sort_by_metric(self, aggregator, students, evaluations):
        results = aggregator.aggregate(students, [FORM_A, FORM_B], evaluations, sort_by="X")
        assert [r.name for r in results] == ["Bob", "Alice", "Cara"]
        assert [r.rank for r in results] == [1, 2, 3]

    def test_missing_metric_sorts_as_zero(self, aggregator, students, evaluations):
        results = aggregator.aggregate(students, [FORM_A, FORM_B], evaluations, sort_by="Nonexistent")
        # everyone is 0, so id order decides
        assert [r.student_id for r in results] == [1, 2, 3]

    def test_explicit_average_key(self, aggregator, students, evaluations):
        results = aggregator.aggregate(students, [FORM_A, FORM_B], evaluations, sort_by="average_score")
        assert [r.student_id for r in results] == [1, 2, 3]


class TestFormMetricSummary:
    def test_main_metrics(self, evaluations):
        summary = summarize_form_metrics(FORM_A, 5, evaluations[10], {1: "Alice", 2: "Bob"})
        assert summary.avg_metrics == {"TC": 7.0, "X": 7.5}
        assert [i.intern_name for i in summary.interns] == ["Alice", "Bob"]
        assert summary.interns[1].metrics == {"TC": 6.0, "X": 9.0}
        assert summary.tutor_id == 5

    def test_selection_filters_interns(self, evaluations):
        summary = summarize_form_metrics(FORM_A, 5, evaluations[10], {2: "Bob"})
        assert summary.avg_metrics == {"TC": 6.0, "X": 9.0}
        assert len(summary.interns) == 1

    def test_sub_metrics(self):
        ev = record(1, 8.0)
        ev.field_scores = [NormalizedFieldScore(field_name="TC", score=8.0, sub_scores=[
            RawSubScore(sub_field_name="Quiz Score", score=4),
            RawSubScore(sub_field_name="Fundamentals Understanding", score=3),
        ])]
        other = record(2, 6.0)
        other.field_scores = [NormalizedFieldScore(field_name="TC", score=6.0, sub_scores=[
            RawSubScore(sub_field_name="Quiz Score", score=5),
        ])]
        summary = summarize_form_metrics(FORM_A, 5, [ev, other], {1: "Alice", 2: "Bob"}, metric_type="sub")
        assert summary.avg_metrics == {"Quiz Score": 4.5, "Fundamentals Understanding": 3.0}
        assert summary.interns[0].metrics == {"Quiz Score": 4.0, "Fundamentals Understanding": 3.0}

    def test_nothing_selected(self, evaluations):
        assert summarize_form_metrics(FORM_A, 5, evaluations[10], {3: "Cara"}) is None
