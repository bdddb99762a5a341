# backend/app/core/scoring/field_aggregator.py
import math
from typing import Dict, List, Optional, Sequence

from backend.app.config.settings import DEFAULT_FIELD_MAX
from backend.app.core.errors import ValidationError
from backend.app.core.scoring.normalizer import ScoreNormalizer
from backend.app.schemas.evaluation_schemas import NormalizedFieldScore, RawFieldInput, RawSubScore
from backend.app.schemas.form_schemas import FieldDefinition


class FieldAggregator:
    """
    Turns one raw submission into the normalized field-score record for a form.

    Every form field is required. Any bad entry rejects the whole submission,
    so callers never persist a partially scored evaluation.
    """

    def __init__(self, normalizer: Optional[ScoreNormalizer] = None):
        self.normalizer = normalizer or ScoreNormalizer()

    def aggregate(self, form_fields: Sequence[FieldDefinition],
                  raw_submission: Sequence[RawFieldInput]) -> List[NormalizedFieldScore]:
        inputs = self._index_inputs(form_fields, raw_submission)

        results = []
        for field in form_fields:
            raw = inputs.get(field.name)
            if raw is None or (raw.score is None and not raw.sub_scores):
                raise ValidationError(f"Missing score for required field '{field.name}'")
            results.append(self._score_field(field, raw))
        return results

    # ------------------------------------------------------------------
    def _index_inputs(self, form_fields: Sequence[FieldDefinition],
                      raw_submission: Sequence[RawFieldInput]) -> Dict[str, RawFieldInput]:
        known = {f.name for f in form_fields}
        inputs: Dict[str, RawFieldInput] = {}
        for raw in raw_submission:
            if raw.field_name not in known:
                raise ValidationError(f"Field '{raw.field_name}' is not part of this form")
            if raw.field_name in inputs:
                raise ValidationError(f"Field '{raw.field_name}' was scored more than once")
            inputs[raw.field_name] = raw
        return inputs

    def _score_field(self, field: FieldDefinition, raw: RawFieldInput) -> NormalizedFieldScore:
        if raw.sub_scores:
            if not field.is_composite:
                raise ValidationError(f"Field '{field.name}' has no sub-fields to score")
            self._validate_sub_scores(field, raw.sub_scores)
            score = self.normalizer.normalize(raw.sub_scores, field.sub_field_max)
            return NormalizedFieldScore(
                field_name=field.name,
                score=score,
                sub_scores=[s.model_copy() for s in raw.sub_scores],
            )

        declared_max = field.max_value if field.max_value is not None else DEFAULT_FIELD_MAX
        _check_range(field.name, raw.score, declared_max)
        return NormalizedFieldScore(
            field_name=field.name,
            score=self.normalizer.normalize_simple(raw.score, declared_max),
            sub_scores=[],
        )

    @staticmethod
    def _validate_sub_scores(field: FieldDefinition, sub_scores: Sequence[RawSubScore]) -> None:
        maxima = {sf.name: sf.max_value for sf in field.sub_fields}
        seen = set()
        for sub in sub_scores:
            if not sub.sub_field_name or sub.sub_field_name not in maxima:
                raise ValidationError(
                    f"Unknown sub-field '{sub.sub_field_name}' for field '{field.name}'"
                )
            if sub.sub_field_name in seen:
                raise ValidationError(
                    f"Sub-field '{sub.sub_field_name}' of '{field.name}' was scored more than once"
                )
            seen.add(sub.sub_field_name)
            sub_max = maxima[sub.sub_field_name]
            _check_range(f"{field.name} / {sub.sub_field_name}", sub.score,
                         sub_max if sub_max is not None else field.sub_field_max)


def _check_range(label: str, value: float, declared_max: float) -> None:
    if not math.isfinite(value) or value < 0 or value > declared_max:
        raise ValidationError(f"Score {value} for '{label}' is outside [0, {declared_max:g}]")
